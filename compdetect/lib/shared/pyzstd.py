from compdetect.lib.dependencies import dependency


@dependency('pyzstd')
def pyzstd():
    import pyzstd
    return pyzstd
