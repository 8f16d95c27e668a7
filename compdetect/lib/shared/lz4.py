from compdetect.lib.dependencies import dependency


@dependency('lz4')
def lz4():
    import lz4.frame
    return lz4.frame
