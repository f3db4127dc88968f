"""Readable forms of interesting Nikon maker note tags."""

from __future__ import annotations

import math
import re
import struct
from typing import List, Optional, Sequence, Tuple, Union

from .exifinfo import (
    EXIF_STD_BUF_LEN,
    IFD_EXIF,
    TAG_FLASH,
    ExifData,
    mnote_tag,
    tag_line,
    trim_spaces,
)

__all__ = [
    "FLASH_CONTROL_MODES",
    "CONTRAST_DETECT_AF",
    "AF_AREA_MODE_PHASE",
    "AF_AREA_MODE_CONTRAST",
    "PHASE_DETECT_AF",
    "PRIMARY_AF_POINT_51",
    "PRIMARY_AF_POINT_11",
    "PRIMARY_AF_POINT_39",
    "PICTURE_CONTROL_ADJUST",
    "primary_af_point",
    "flash_output",
    "flash_exposure_compensation",
    "active_d_lighting",
    "picture_control",
    "flash_control_mode",
    "af_info",
    "nikon_mnote_tags",
]

# The last entry is not a Nikon setting; it marks an unknown mode.
FLASH_CONTROL_MODES: Tuple[str, ...] = (
    "Off", "iTTL-BL", "iTTL", "Auto Aperture", "Automatic",
    "GN (distance priority)", "Manual", "Repeating Flash", "N/A",
)
_FLASH_CONTROL_MODE_MASK = 0x7F

CONTRAST_DETECT_AF: Tuple[str, ...] = ("Off", "On")

AF_AREA_MODE_PHASE: Tuple[str, ...] = (
    "Single Area", "Dynamic Area", "Dynamic Area (closest subject)",
    "Group Dynamic ", "Dynamic Area (9 points) ", "Dynamic Area (21 points)",
    "Dynamic Area (51 points) ", "Dynamic Area (51 points, 3D-tracking)",
    "Auto-area", "Dynamic Area (3D-tracking)", "Single Area (wide)",
    "Dynamic Area (wide)", "Dynamic Area (wide, 3D-tracking)",
)

AF_AREA_MODE_CONTRAST: Tuple[str, ...] = (
    "Contrast-detect", "Contrast-detect (normal area)",
    "Contrast-detect (wide area)", "Contrast-detect (face priority)",
    "Contrast-detect (subject tracking)",
)

PHASE_DETECT_AF: Tuple[str, ...] = (
    "Off", "On (51-point)", "On (11-point)", "On (39-point)",
)

PRIMARY_AF_POINT_51: Tuple[str, ...] = (
    "(none)", "C6 (Center)", "B6", "A5", "D6", "E5", "C7", "B7", "A6", "D7",
    "E6", "C5", "B5", "A4", "D5", "E4", "C8", "B8", "A7", "D8", "E7", "C9",
    "B9", "A8", "D9", "E8", "C10", "B10", "A9", "D10", "E9", "C11", "B11",
    "D11", "C4", "B4", "A3", "D4", "E3", "C3", "B3", "A2", "D3", "E2", "C2",
    "B2", "A1", "D2", "E1", "C1", "B1", "D1",
)

PRIMARY_AF_POINT_11: Tuple[str, ...] = (
    "(none)", "Center", "Top", "Bottom", "Mid-left", "Upper-left",
    "Lower-left", "Far Left", "Mid-right", "Upper-right", "Lower-right",
    "Far Right",
)

PRIMARY_AF_POINT_39: Tuple[str, ...] = (
    "(none)", "C6 (Center)", "B6", "A2", "D6", "E2", "C7", "B7", "A3", "D7",
    "E3", "C5", "B5", "A1", "D5", "E1", "C8", "B8", "D8", "C9", "B9", "D9",
    "C10", "B10", "D10", "C11", "B11", "D11", "C4", "B4", "D4", "C3", "B3",
    "D3", "C2", "B2", "D2", "C1", "B1", "D1",
)

PICTURE_CONTROL_ADJUST: Tuple[str, ...] = (
    "Default Settings", "Quick Adjust", "Full Control",
)

_FLASH_NOT_FIRED = "Flash: Flash did not fire\n"

_ACTIVE_D_LIGHTING = {
    0: "Off",
    1: "Low",
    3: "Normal",
    5: "High",
    7: "Extra High",
    65535: "Auto",
}

_FLASH_INFO_VERSIONS = {
    (22, ord("3")),  # FlashInfo0103
    (22, ord("4")),  # FlashInfo0104
    (21, ord("2")),  # FlashInfo0102
    (19, ord("0")),  # FlashInfo0100
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_UINT = re.compile(r"\+?\d+")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_UNKNOWN_DATA_PREFIX: List[Tuple[str, Union[str, int]]] = [
    ("u", 0),
    ("lit", " bytes unknown data: 303130"),
    ("x", 0),
]


class _Scanner:
    """Reads fields from text in the manner of a scanf format."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def literal(self, lit: str) -> bool:
        for ch in lit:
            if ch.isspace():
                self._skip_ws()
            elif self.pos < len(self.text) and self.text[self.pos] == ch:
                self.pos += 1
            else:
                return False
        return True

    def uint(self) -> Optional[int]:
        self._skip_ws()
        match = _UINT.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return int(match.group())

    def hex_byte(self) -> Optional[int]:
        self._skip_ws()
        start = self.pos
        while (
            self.pos < len(self.text)
            and self.pos - start < 2
            and self.text[self.pos] in _HEX_DIGITS
        ):
            self.pos += 1
        if self.pos == start:
            return None
        return int(self.text[start:self.pos], 16)

    def word(self, width: int) -> Optional[str]:
        self._skip_ws()
        start = self.pos
        while (
            self.pos < len(self.text)
            and self.pos - start < width
            and not self.text[self.pos].isspace()
        ):
            self.pos += 1
        if self.pos == start:
            return None
        return self.text[start:self.pos]


def _scan(text: str, steps: Sequence[Tuple[str, Union[str, int]]]) -> list:
    """Return the values read by ``steps``, stopping at the first mismatch."""
    scanner = _Scanner(text)
    values: list = []
    for kind, arg in steps:
        if kind == "lit":
            if not scanner.literal(str(arg)):
                break
            continue
        if kind == "skip":
            if scanner.word(int(arg)) is None:
                break
            continue
        if kind == "u":
            value = scanner.uint()
        elif kind == "x":
            value = scanner.hex_byte()
        else:
            value = scanner.word(int(arg))
        if value is None:
            break
        values.append(value)
    return values


def _filled(values: list, defaults: Sequence[object]) -> list:
    return list(values) + list(defaults[len(values):])


def _mnote_value(data: Optional[ExifData], tag: int) -> str:
    """Return the last non-blank value of a maker note tag, or ``""``."""
    if data is None:
        return ""
    value = ""
    for _title, raw in data.mnote(tag):
        text = trim_spaces(raw[:1023])
        if text:
            value = text
    return value


def _decode_name(hex_text: str) -> str:
    raw = bytearray()
    for start in range(0, len(hex_text), 2):
        pair = hex_text[start:start + 2]
        if not all(ch in _HEX_DIGITS for ch in pair):
            break
        raw.append(int(pair, 16))
    name = bytes(raw).split(b"\x00", 1)[0].decode("latin-1")
    return trim_spaces(name)


def _round_half_away(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def _to_signed_char(value: int) -> int:
    return (value + 128) % 256 - 128


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def primary_af_point(phasedetectaf: int, primafpt: int) -> str:
    """Name the primary AF point for a phase detect AF system."""
    if phasedetectaf == 0:
        return "FAIL"
    tables = {1: PRIMARY_AF_POINT_51, 2: PRIMARY_AF_POINT_11, 3: PRIMARY_AF_POINT_39}
    table = tables.get(phasedetectaf)
    if table is None:
        return "?"
    if 0 <= primafpt < len(table):
        return table[primafpt]
    return ""


def flash_output(flashoutput: int) -> str:
    """Describe flash output power as a fraction of full power."""
    if flashoutput == 0:
        return "Full"
    if flashoutput % 6 == 0:
        return f"1/{1 << (flashoutput // 6)}"
    return f"1/2^({flashoutput / 6.0:f})"


def flash_exposure_compensation(data: Optional[ExifData]) -> str:
    """Describe maker note tag 18, rounded to sixths of an EV."""
    match = _FLOAT.match(_mnote_value(data, 18))
    value = _to_float32(float(match.group(1))) if match else 0.0
    steps = _to_signed_char(_round_half_away(value * 6.0))
    return f"FlashExposureCompensation: {steps / 6.0:+.1f} EV\n"


def active_d_lighting(data: Optional[ExifData]) -> str:
    """Describe maker note tag 34, the Active D-Lighting setting."""
    values = _scan(_mnote_value(data, 34), [("u", 0)])
    setting = values[0] if values else 0
    answer = _ACTIVE_D_LIGHTING.get(setting, "N/A")
    return f"Active D-Lightning: {answer}\n"


def picture_control(data: Optional[ExifData]) -> str:
    """Describe maker note tag 35, the picture control data."""
    steps = _UNKNOWN_DATA_PREFIX + [
        ("s", 40), ("s", 40), ("skip", 8),
        ("x", 0), ("x", 0), ("x", 0), ("x", 0), ("x", 0), ("x", 0), ("x", 0),
    ]
    (length, version, name_hex, base_hex, adjust, quick, sharpness,
     contrast, brightness, saturation, hue) = _filled(
        _scan(_mnote_value(data, 35), steps),
        (0, 0, "", "", 0, 0, 0, 0, 0, 0, 0),
    )
    if length != 58 or version != ord("0") or adjust >= len(PICTURE_CONTROL_ADJUST):
        return ""
    return (
        f"PictCtrlData: Name: {_decode_name(name_hex)}; "
        f"Base: {_decode_name(base_hex)}; "
        f"CtrlAdj: {PICTURE_CONTROL_ADJUST[adjust]}; Quick: {quick}; "
        f"Shrp: {sharpness}; Contr: {contrast}; Brght: {brightness}; "
        f"Sat: {saturation}; Hue: {hue}\n"
    )


def flash_control_mode(data: Optional[ExifData]) -> str:
    """Describe maker note tag 168, the flash control mode and power."""
    steps = _UNKNOWN_DATA_PREFIX + [
        ("skip", 8), ("x", 0), ("x", 0), ("x", 0), ("x", 0),
    ]
    length, version, _flags, control_mode, output, _compensation = _filled(
        _scan(_mnote_value(data, 168), steps),
        (0, 0, 0, len(FLASH_CONTROL_MODES) - 1, 0, 0),
    )
    control_mode &= _FLASH_CONTROL_MODE_MASK
    if control_mode >= len(FLASH_CONTROL_MODES):
        return ""
    if (length, version) not in _FLASH_INFO_VERSIONS:
        return ""
    power = flash_output(output)[: EXIF_STD_BUF_LEN - 1]
    return f"NikonFlashControlMode: {FLASH_CONTROL_MODES[control_mode]} (Power: {power})\n"


def af_info(data: Optional[ExifData]) -> str:
    """Describe maker note tag 183, the autofocus information."""
    steps = _UNKNOWN_DATA_PREFIX + [("x", 0), ("x", 0), ("x", 0), ("x", 0)]
    length, version, contrast_af, area_mode, phase_af, primary = _filled(
        _scan(_mnote_value(data, 183), steps),
        (0, 0, 0, 0, 0, 0),
    )
    if (
        length != 30
        or version != ord("0")
        or contrast_af >= len(CONTRAST_DETECT_AF)
        or phase_af >= len(PHASE_DETECT_AF)
    ):
        return ""
    if contrast_af != 0 and area_mode < len(AF_AREA_MODE_CONTRAST):
        return (
            f"ContrastDetectAF: {CONTRAST_DETECT_AF[contrast_af]}; "
            f"AFAreaMode: {AF_AREA_MODE_CONTRAST[area_mode]}\n"
        )
    if phase_af != 0 and area_mode < len(AF_AREA_MODE_PHASE):
        point = primary_af_point(phase_af, primary)
        return (
            f"PhaseDetectAF: {PHASE_DETECT_AF[phase_af]}; "
            f"AreaMode: {AF_AREA_MODE_PHASE[area_mode]}; "
            f"PrimaryAFPoint: {point}\n"
        )
    return ""


def nikon_mnote_tags(data: Optional[ExifData], tag: int) -> str:
    """Return a Nikon maker note tag in readable form.

    Flash related tags are shown only when the flash fired.
    """
    flash_state = trim_spaces(tag_line(data, IFD_EXIF, TAG_FLASH)[: EXIF_STD_BUF_LEN - 1])
    fired = flash_state != _FLASH_NOT_FIRED

    if tag in (8, 9, 135):
        return mnote_tag(data, tag) if fired else ""
    if tag == 18:
        return flash_exposure_compensation(data) if fired else ""
    if tag == 34:
        return active_d_lighting(data)
    if tag == 35:
        return picture_control(data)
    if tag == 168:
        return flash_control_mode(data) if fired else ""
    if tag == 183:
        return af_info(data)
    return mnote_tag(data, tag)