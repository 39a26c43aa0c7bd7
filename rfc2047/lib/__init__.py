"""
Library modules used by the decoder. The pipeline itself is implemented in `rfc2047.lib.words`.
"""
