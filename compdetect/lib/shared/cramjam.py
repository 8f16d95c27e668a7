from compdetect.lib.dependencies import dependency


@dependency('cramjam')
def cramjam():
    import cramjam
    return cramjam
