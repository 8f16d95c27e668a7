from compdetect.lib.dependencies import dependency


@dependency('snappy', ['python-snappy'])
def snappy():
    import snappy
    return snappy
