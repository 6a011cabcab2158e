"""Voxel types and their packing into 32-bit integer words."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

_INT8_MIN = -128
_INT8_MAX = 127
_WORD_MASK = 0xFFFFFFFF

_OBSERVED_FLAG = 0b0001
_HALLUCINATED_FLAG = 0b0010
_IN_QUEUE_FLAG = 0b0100
_FIXED_FLAG = 0b1000


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


@dataclass
class TsdfVoxel:
    """Truncated signed distance voxel."""

    distance: float = 0.0
    weight: float = 0.0
    color: Color = Color()


@dataclass
class OccupancyVoxel:
    """Occupancy voxel holding a log-odds probability."""

    probability_log: float = 0.0
    observed: bool = False


@dataclass
class EsdfVoxel:
    """Euclidean signed distance voxel."""

    distance: float = 0.0
    observed: bool = False
    hallucinated: bool = False
    in_queue: bool = False
    fixed: bool = False
    parent: tuple[int, int, int] = (0, 0, 0)


@dataclass
class IntensityVoxel:
    """Voxel holding an intensity measurement and its weight."""

    intensity: float = 0.0
    weight: float = 0.0


def _float_to_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _bits_to_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits))[0]


def _to_int8(byte: int) -> int:
    return byte - 256 if byte >= 128 else byte


def serialize_direction(parent: Sequence[int]) -> int:
    """Pack a parent direction into the upper three bytes of a word.

    Each component is clamped to the int8 range.  Negative components are
    sign-extended before being shifted, exactly as the stored format does,
    so they also set every higher bit of the word.
    """
    x, y, z = (min(_INT8_MAX, max(int(c), _INT8_MIN)) for c in parent)
    data = 0
    data |= (x << 24) & _WORD_MASK
    data |= (y << 16) & _WORD_MASK
    data |= (z << 8) & _WORD_MASK
    return data


def deserialize_direction(data: int) -> tuple[int, int, int]:
    """Unpack a parent direction from the upper three bytes of a word."""
    return (
        _to_int8((data >> 24) & 0xFF),
        _to_int8((data >> 16) & 0xFF),
        _to_int8((data >> 8) & 0xFF),
    )


def _encode_tsdf(voxel: TsdfVoxel) -> list[int]:
    color = voxel.color
    return [
        _float_to_bits(voxel.distance),
        _float_to_bits(voxel.weight),
        color.a | (color.b << 8) | (color.g << 16) | (color.r << 24),
    ]


def _decode_tsdf(words: Sequence[int]) -> TsdfVoxel:
    distance_bits, weight_bits, color_bits = words
    return TsdfVoxel(
        distance=_bits_to_float(distance_bits),
        weight=_bits_to_float(weight_bits),
        color=Color(
            r=(color_bits >> 24) & 0xFF,
            g=(color_bits >> 16) & 0xFF,
            b=(color_bits >> 8) & 0xFF,
            a=color_bits & 0xFF,
        ),
    )


def _encode_occupancy(voxel: OccupancyVoxel) -> list[int]:
    return [_float_to_bits(voxel.probability_log), int(bool(voxel.observed))]


def _decode_occupancy(words: Sequence[int]) -> OccupancyVoxel:
    probability_bits, observed_bits = words
    return OccupancyVoxel(
        probability_log=_bits_to_float(probability_bits),
        observed=bool(observed_bits & 0xFF),
    )


def _encode_esdf(voxel: EsdfVoxel) -> list[int]:
    flags = 0
    if voxel.observed:
        flags |= _OBSERVED_FLAG
    if voxel.hallucinated:
        flags |= _HALLUCINATED_FLAG
    if voxel.in_queue:
        flags |= _IN_QUEUE_FLAG
    if voxel.fixed:
        flags |= _FIXED_FLAG
    return [
        _float_to_bits(voxel.distance),
        serialize_direction(voxel.parent) | (flags & 0xFF),
    ]


def _decode_esdf(words: Sequence[int]) -> EsdfVoxel:
    distance_bits, packed = words
    return EsdfVoxel(
        distance=_bits_to_float(distance_bits),
        observed=bool(packed & _OBSERVED_FLAG),
        hallucinated=bool(packed & _HALLUCINATED_FLAG),
        in_queue=bool(packed & _IN_QUEUE_FLAG),
        fixed=bool(packed & _FIXED_FLAG),
        parent=deserialize_direction(packed),
    )


def _encode_intensity(voxel: IntensityVoxel) -> list[int]:
    return [_float_to_bits(voxel.intensity), _float_to_bits(voxel.weight)]


def _decode_intensity(words: Sequence[int]) -> IntensityVoxel:
    intensity_bits, weight_bits = words
    return IntensityVoxel(
        intensity=_bits_to_float(intensity_bits),
        weight=_bits_to_float(weight_bits),
    )


_CODECS: dict[type, tuple[int, Callable, Callable]] = {
    TsdfVoxel: (3, _encode_tsdf, _decode_tsdf),
    OccupancyVoxel: (2, _encode_occupancy, _decode_occupancy),
    EsdfVoxel: (2, _encode_esdf, _decode_esdf),
    IntensityVoxel: (2, _encode_intensity, _decode_intensity),
}


def _codec(voxel_type: type) -> tuple[int, Callable, Callable]:
    try:
        return _CODECS[voxel_type]
    except KeyError:
        raise TypeError(f"voxel type is not serializable: {voxel_type!r}") from None


def serialize_block(voxels: Iterable) -> list[int]:
    """Pack the voxels of a block into a flat list of 32-bit words."""
    data: list[int] = []
    for voxel in voxels:
        _, encode, _ = _codec(type(voxel))
        data.extend(encode(voxel))
    return data


def deserialize_block(voxel_type: type, data: Sequence[int], num_voxels: int) -> list:
    """Unpack ``num_voxels`` voxels of ``voxel_type`` from a list of words."""
    packets, _, decode = _codec(voxel_type)
    if len(data) != num_voxels * packets:
        raise ValueError(
            f"expected {num_voxels * packets} data words for {num_voxels} voxels, "
            f"got {len(data)}"
        )
    words = iter(data)
    return [decode(chunk) for chunk in zip(*[words] * packets)]