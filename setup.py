#!/usr/bin/env python3
from __future__ import annotations

import re
import os
import setuptools
import pathlib
import sys
import toml

__minver__ = '3.8'
__github__ = 'https://github.com/binref/rfc2047/'
__gitraw__ = 'https://raw.githubusercontent.com/binref/rfc2047/'
__author__ = 'Jesko Huettenhain'
__slogan__ = 'A decoder for MIME encoded words from RFC 2047.'
__topics__ = [
    'Development Status :: 3 - Alpha',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Communications :: Email',
    'Topic :: Text Processing',
]


class DeployCommand(setuptools.Command):
    description = 'Tag and push new release.'
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    @staticmethod
    def main():
        import subprocess
        import shlex
        import rfc2047

        from pathlib import Path

        DEVNULL = open(os.devnull, 'wb')

        def run(cmd):
            print(F'run: {cmd}')
            return subprocess.check_call(
                shlex.split(cmd),
                stdout=DEVNULL,
                stderr=DEVNULL,
                cwd=os.getcwd(),
            )

        root = Path(rfc2047.__file__).parent.parent
        os.chdir(root)

        try:
            run(F'git tag {rfc2047.__version__}')
            run(R'git push')
            run(R'git push --tags')
        except subprocess.CalledProcessError as E:
            print(F'error: {E!s}')
            return 1
        else:
            return 0

    def run(self):
        sys.exit(self.main())


def get_config():
    here = pathlib.Path(__file__).parent.absolute()
    sys.path.insert(0, str(here))

    import rfc2047

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = here.joinpath('README.md')
        if not os.path.exists(filename):
            return rfc2047.__doc__
        with open(filename, 'r', encoding='UTF8') as README:
            def complete_link(match):
                link: str = match[1]
                if any(link.lower().endswith(xt) for xt in ('jpg', 'gif', 'png', 'svg')):
                    return F'({__gitraw__}master/{link})'
                else:
                    return F'({__github__}blob/master/{link})'
            readme = README.read()
            return re.sub(R'(?<=\])\((?!\w+://)(.*?)\)', complete_link, readme)

    ppcfg: dict[str, dict] = toml.load(str(here.joinpath('pyproject.toml')))
    options: dict[str, dict[str, list[str]]] = ppcfg.get('tool', {}).get('rfc2047', {})

    return dict(
        name=rfc2047.__distribution__,
        version=rfc2047.__version__,
        long_description=get_setup_readme(),
        long_description_content_type='text/markdown',
        author=__author__,
        description=__slogan__,
        url=__github__,
        python_requires=F'>={__minver__}',
        classifiers=__topics__,
        packages=setuptools.find_packages(include=('rfc2047*',)),
        install_requires=options.get('requires', []),
        extras_require=options.get('extras', {}),
        include_package_data=True,
        entry_points={'console_scripts': ['rfc2047=rfc2047.shell:main']},
        cmdclass={'deploy': DeployCommand},
    )


if __name__ == '__main__':
    setuptools.setup(**get_config())
