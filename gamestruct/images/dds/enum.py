from enum import IntFlag


class DDSD(IntFlag):
    '''Which members of the header contain valid data (dwFlags).'''
    CAPS        = 0x1
    HEIGHT      = 0x2
    WIDTH       = 0x4
    PITCH       = 0x8
    PIXELFORMAT = 0x1000
    MIPMAPCOUNT = 0x20000
    LINEARSIZE  = 0x80000
    DEPTH       = 0x800000


class DDPF(IntFlag):
    '''Kind of data in the pixel format block.'''
    ALPHAPIXELS = 0x1
    ALPHA       = 0x2
    FOURCC      = 0x4
    RGB         = 0x40
    YUV         = 0x200
    LUMINANCE   = 0x20000


class DDSCAPS(IntFlag):
    COMPLEX = 0x8
    TEXTURE = 0x1000
    MIPMAP  = 0x400000


class DDSCAPS2(IntFlag):
    CUBEMAP           = 0x200
    CUBEMAP_POSITIVEX = 0x400
    CUBEMAP_NEGATIVEX = 0x800
    CUBEMAP_POSITIVEY = 0x1000
    CUBEMAP_NEGATIVEY = 0x2000
    CUBEMAP_POSITIVEZ = 0x4000
    CUBEMAP_NEGATIVEZ = 0x8000
    VOLUME            = 0x200000
