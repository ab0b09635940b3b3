"""Constants, enumerations and header structures of the VTF texture format.

A VTF file starts with a header, followed by the low resolution image and
the image data. Image data is stored by MIP level (smallest first), then
frame, then face, then depth slice.
"""

import enum
import struct
from dataclasses import dataclass, field

from .errors import VTFLibError

VTF_SIGNATURE = b"VTF\x00"

VTF_MAJOR_VERSION = 7
VTF_MINOR_VERSION = 5
VTF_MINOR_VERSION_DEFAULT = 3

VTF_MINOR_VERSION_MIN_SPHERE_MAP = 1
VTF_MINOR_VERSION_MIN_VOLUME = 2
VTF_MINOR_VERSION_MIN_RESOURCE = 3
VTF_MINOR_VERSION_MIN_NO_SPHERE_MAP = 5

DXT_QUALITY_BASE = 68
KERNEL_FILTER_BASE = 1040
HEIGHT_CONVERSION_METHOD_BASE = 1009
NORMAL_ALPHA_RESULT_BASE = 1033

IMAGE_FLAG_COUNT = 30

RSRCF_HAS_NO_DATA_CHUNK = 0x02
VTF_RSRC_MAX_DICTIONARY_ENTRIES = 32


class ImageFormat(enum.IntEnum):
    """Image data formats."""

    NONE = -1
    RGBA8888 = 0
    ABGR8888 = 1
    RGB888 = 2
    BGR888 = 3
    RGB565 = 4
    I8 = 5
    IA88 = 6
    P8 = 7
    A8 = 8
    RGB888_BLUESCREEN = 9
    BGR888_BLUESCREEN = 10
    ARGB8888 = 11
    BGRA8888 = 12
    DXT1 = 13
    DXT3 = 14
    DXT5 = 15
    BGRX8888 = 16
    BGR565 = 17
    BGRX5551 = 18
    BGRA4444 = 19
    DXT1_ONEBITALPHA = 20
    BGRA5551 = 21
    UV88 = 22
    UVWQ8888 = 23
    RGBA16161616F = 24
    RGBA16161616 = 25
    UVLX8888 = 26
    R32F = 27
    RGB323232F = 28
    RGBA32323232F = 29
    NV_DST16 = 30
    NV_DST24 = 31
    NV_INTZ = 32
    NV_RAWZ = 33
    ATI_DST16 = 34
    ATI_DST24 = 35
    NV_NULL = 36
    ATI2N = 37
    ATI1N = 38


class ImageFlag(enum.IntFlag):
    """Header flags of a VTF image."""

    POINTSAMPLE = 0x00000001
    TRILINEAR = 0x00000002
    CLAMPS = 0x00000004
    CLAMPT = 0x00000008
    ANISOTROPIC = 0x00000010
    HINT_DXT5 = 0x00000020
    SRGB = 0x00000040
    DEPRECATED_NOCOMPRESS = 0x00000040
    NORMAL = 0x00000080
    NOMIP = 0x00000100
    NOLOD = 0x00000200
    MINMIP = 0x00000400
    PROCEDURAL = 0x00000800
    ONEBITALPHA = 0x00001000
    EIGHTBITALPHA = 0x00002000
    ENVMAP = 0x00004000
    RENDERTARGET = 0x00008000
    DEPTHRENDERTARGET = 0x00010000
    NODEBUGOVERRIDE = 0x00020000
    SINGLECOPY = 0x00040000
    UNUSED0 = 0x00080000
    DEPRECATED_ONEOVERMIPLEVELINALPHA = 0x00080000
    UNUSED1 = 0x00100000
    DEPRECATED_PREMULTCOLORBYONEOVERMIPLEVEL = 0x00100000
    UNUSED2 = 0x00200000
    DEPRECATED_NORMALTODUDV = 0x00200000
    UNUSED3 = 0x00400000
    DEPRECATED_ALPHATESTMIPGENERATION = 0x00400000
    NODEPTHBUFFER = 0x00800000
    UNUSED4 = 0x01000000
    DEPRECATED_NICEFILTERED = 0x01000000
    CLAMPU = 0x02000000
    VERTEXTEXTURE = 0x04000000
    SSBUMP = 0x08000000
    UNUSED5 = 0x10000000
    DEPRECATED_UNFILTERABLE_OK = 0x10000000
    BORDER = 0x20000000
    DEPRECATED_SPECVAR_RED = 0x40000000
    DEPRECATED_SPECVAR_ALPHA = 0x80000000
    LAST = 0x20000000


class CubeMapFace(enum.IntEnum):
    """Cube map face indices."""

    RIGHT = 0
    LEFT = 1
    BACK = 2
    FRONT = 3
    UP = 4
    DOWN = 5
    SPHERE_MAP = 6


class MipmapFilter(enum.IntEnum):
    """MIP map reduction filters."""

    POINT = 0
    BOX = 1
    TRIANGLE = 2
    QUADRATIC = 3
    CUBIC = 4
    CATROM = 5
    MITCHELL = 6
    GAUSSIAN = 7
    SINC = 8
    BESSEL = 9
    HANNING = 10
    HAMMING = 11
    BLACKMAN = 12
    KAISER = 13


class SharpenFilter(enum.IntEnum):
    """MIP map sharpen filters."""

    NONE = 0
    NEGATIVE = 1
    LIGHTER = 2
    DARKER = 3
    CONTRASTMORE = 4
    CONTRASTLESS = 5
    SMOOTHEN = 6
    SHARPENSOFT = 7
    SHARPENMEDIUM = 8
    SHARPENSTRONG = 9
    FINDEDGES = 10
    CONTOUR = 11
    EDGEDETECT = 12
    EDGEDETECTSOFT = 13
    EMBOSS = 14
    MEANREMOVAL = 15
    UNSHARP = 16
    XSHARPEN = 17
    WARPSHARP = 18


class DXTQuality(enum.IntEnum):
    """DXT compression quality levels."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    HIGHEST = 3


class KernelFilter(enum.IntEnum):
    """Normal map creation kernel sizes."""

    FILTER_4X = 0
    FILTER_3X3 = 1
    FILTER_5X5 = 2
    FILTER_7X7 = 3
    FILTER_9X9 = 4
    DUDV = 5


class HeightConversionMethod(enum.IntEnum):
    """Normal map height conversion methods."""

    ALPHA = 0
    AVERAGE_RGB = 1
    BIASED_RGB = 2
    RED = 3
    GREEN = 4
    BLUE = 5
    MAX_RGB = 6
    COLORSPACE = 7


class NormalAlphaResult(enum.IntEnum):
    """Handling of the alpha channel of a generated normal map."""

    NOCHANGE = 0
    HEIGHT = 1
    BLACK = 2
    WHITE = 3


class ResizeMethod(enum.IntEnum):
    """Image resize methods."""

    NEAREST_POWER2 = 0
    BIGGEST_POWER2 = 1
    SMALLEST_POWER2 = 2
    SET = 3


class LookDir(enum.IntEnum):
    """Sphere map look directions."""

    DOWN_X = 0
    DOWN_NEGX = 1
    DOWN_Y = 2
    DOWN_NEGY = 3
    DOWN_Z = 4
    DOWN_NEGZ = 5


def _byte(part):
    if isinstance(part, str):
        part = ord(part)
    return part & 0xFF


def make_resource_id(a, b, c, d=0):
    """Pack three id bytes and a flag byte into a resource type value."""
    return _byte(a) | (_byte(b) << 8) | (_byte(c) << 16) | (_byte(d) << 24)


class ResourceEntryType(enum.IntEnum):
    """Resource dictionary entry types."""

    LEGACY_LOW_RES_IMAGE = make_resource_id(0x01, 0, 0)
    LEGACY_IMAGE = make_resource_id(0x30, 0, 0)
    SHEET = make_resource_id(0x10, 0, 0)
    CRC = make_resource_id("C", "R", "C", RSRCF_HAS_NO_DATA_CHUNK)
    TEXTURE_LOD_SETTINGS = make_resource_id("L", "O", "D", RSRCF_HAS_NO_DATA_CHUNK)
    TEXTURE_SETTINGS_EX = make_resource_id("T", "S", "O", RSRCF_HAS_NO_DATA_CHUNK)
    KEY_VALUE_DATA = make_resource_id("K", "V", "D")


_RESOURCE = struct.Struct("<II")


@dataclass(frozen=True)
class Resource:
    """One entry of the resource dictionary.

    ``data`` is either the value itself (for entries without a data chunk)
    or the offset of the data from the start of the file.
    """

    type_id: int
    data: int = 0

    @property
    def id_bytes(self):
        """The three identifying bytes."""
        return (self.type_id & 0xFFFFFF).to_bytes(3, "little")

    @property
    def flags(self):
        """The flag byte."""
        return (self.type_id >> 24) & 0xFF

    @property
    def has_data_chunk(self):
        """Whether ``data`` points at a chunk rather than holding the value."""
        return not self.flags & RSRCF_HAS_NO_DATA_CHUNK

    def to_bytes(self):
        return _RESOURCE.pack(self.type_id & 0xFFFFFFFF, self.data & 0xFFFFFFFF)

    @classmethod
    def from_bytes(cls, data):
        if len(data) < _RESOURCE.size:
            raise VTFLibError("Resource entry is truncated.")
        type_id, value = _RESOURCE.unpack_from(data)
        return cls(type_id, value)


_FILE_HEADER = struct.Struct("<4s3I")
_BASE_HEADER = struct.Struct("<4s3IHHIHH4x3f4xfiBiBB")
_DEPTH = struct.Struct("<H")
_RESOURCE_COUNT = struct.Struct("<3xI")
_DEPTH_OFFSET = _BASE_HEADER.size
_RESOURCE_COUNT_OFFSET = _DEPTH_OFFSET + _DEPTH.size
_RESOURCE_HEADER_SIZE = _RESOURCE_COUNT_OFFSET + _RESOURCE_COUNT.size


def _align16(size):
    return (size + 15) // 16 * 16


def _fixed_size(minor):
    if minor >= VTF_MINOR_VERSION_MIN_RESOURCE:
        return _RESOURCE_HEADER_SIZE
    if minor >= VTF_MINOR_VERSION_MIN_VOLUME:
        return _RESOURCE_COUNT_OFFSET
    return _DEPTH_OFFSET


def _image_format(value):
    try:
        return ImageFormat(value)
    except ValueError:
        raise VTFLibError(f"Unknown image format {value}.") from None


@dataclass
class VTFHeader:
    """The header of a VTF file, for any 7.x minor version."""

    width: int = 0
    height: int = 0
    flags: ImageFlag = ImageFlag(0)
    frames: int = 1
    start_frame: int = 0
    reflectivity: tuple = (0.0, 0.0, 0.0)
    bump_scale: float = 1.0
    image_format: ImageFormat = ImageFormat.NONE
    mip_count: int = 1
    low_res_image_format: ImageFormat = ImageFormat.NONE
    low_res_image_width: int = 0
    low_res_image_height: int = 0
    depth: int = 1
    version: tuple = (VTF_MAJOR_VERSION, VTF_MINOR_VERSION_DEFAULT)
    header_size: "int | None" = None
    resources: list = field(default_factory=list)

    @property
    def has_depth(self):
        """Whether this version stores a depth field."""
        return self.version[1] >= VTF_MINOR_VERSION_MIN_VOLUME

    @property
    def has_resources(self):
        """Whether this version stores a resource dictionary."""
        return self.version[1] >= VTF_MINOR_VERSION_MIN_RESOURCE

    def _standard_header_size(self):
        minor = self.version[1]
        size = _align16(_fixed_size(minor))
        if self.has_resources:
            size += _RESOURCE.size * len(self.resources)
        return size

    @classmethod
    def from_bytes(cls, data):
        data = bytes(data)
        if len(data) < _FILE_HEADER.size:
            raise VTFLibError("Data is too small to hold a VTF header.")
        signature, major, minor, header_size = _FILE_HEADER.unpack_from(data)
        if signature != VTF_SIGNATURE:
            raise VTFLibError("File signature does not match 'VTF'.")
        fixed = _fixed_size(minor)
        if len(data) < fixed:
            raise VTFLibError("VTF header is truncated.")
        if header_size < fixed:
            raise VTFLibError(f"Header size {header_size} is too small.")

        (
            _signature, _major, _minor, _size,
            width, height, flags, frames, start_frame,
            r, g, b, bump_scale, image_format, mip_count,
            low_res_format, low_res_width, low_res_height,
        ) = _BASE_HEADER.unpack_from(data)

        header = cls(
            width=width,
            height=height,
            flags=ImageFlag(flags),
            frames=frames,
            start_frame=start_frame,
            reflectivity=(r, g, b),
            bump_scale=bump_scale,
            image_format=_image_format(image_format),
            mip_count=mip_count,
            low_res_image_format=_image_format(low_res_format),
            low_res_image_width=low_res_width,
            low_res_image_height=low_res_height,
            version=(major, minor),
            header_size=header_size,
        )
        if header.has_depth:
            (header.depth,) = _DEPTH.unpack_from(data, _DEPTH_OFFSET)
        if header.has_resources:
            (count,) = _RESOURCE_COUNT.unpack_from(data, _RESOURCE_COUNT_OFFSET)
            if count > VTF_RSRC_MAX_DICTIONARY_ENTRIES:
                raise VTFLibError(
                    f"Resource count {count} exceeds the maximum of "
                    f"{VTF_RSRC_MAX_DICTIONARY_ENTRIES}."
                )
            start = _align16(_RESOURCE_HEADER_SIZE)
            end = start + count * _RESOURCE.size
            if len(data) < end:
                raise VTFLibError("Resource dictionary is truncated.")
            header.resources = [
                Resource.from_bytes(data[offset:offset + _RESOURCE.size])
                for offset in range(start, end, _RESOURCE.size)
            ]
        return header

    def to_bytes(self):
        major, minor = self.version
        if self.has_resources and len(self.resources) > VTF_RSRC_MAX_DICTIONARY_ENTRIES:
            raise VTFLibError(
                f"At most {VTF_RSRC_MAX_DICTIONARY_ENTRIES} resources are allowed."
            )
        standard = self._standard_header_size()
        header_size = standard if self.header_size is None else self.header_size
        if header_size < standard:
            raise VTFLibError(f"Header size {header_size} is too small.")

        out = bytearray(
            _BASE_HEADER.pack(
                VTF_SIGNATURE, major, minor, header_size,
                self.width, self.height, int(self.flags) & 0xFFFFFFFF,
                self.frames, self.start_frame,
                *self.reflectivity, self.bump_scale,
                int(self.image_format), self.mip_count,
                int(self.low_res_image_format),
                self.low_res_image_width, self.low_res_image_height,
            )
        )
        if self.has_depth:
            out += _DEPTH.pack(self.depth)
        if self.has_resources:
            out += _RESOURCE_COUNT.pack(len(self.resources))
            out += bytes(_align16(len(out)) - len(out))
            for resource in self.resources:
                out += resource.to_bytes()
        out += bytes(header_size - len(out))
        return bytes(out)