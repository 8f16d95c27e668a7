"""
Library modules used by the compression detector: structured binary readers, pure Python
decoders for formats without a suitable library, and the environment and logging setup.
"""
