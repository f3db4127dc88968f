"""Human-readable summaries of EXIF metadata."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from PIL import ExifTags, Image, UnidentifiedImageError

__all__ = [
    "EXIF_MAX_DATA",
    "EXIF_STD_BUF_LEN",
    "IFD_0",
    "IFD_EXIF",
    "IFD_GPS",
    "TAG_IMAGE_DESCRIPTION",
    "TAG_MAKE",
    "TAG_MODEL",
    "TAG_EXPOSURE_TIME",
    "TAG_FNUMBER",
    "TAG_EXPOSURE_PROGRAM",
    "TAG_ISO_SPEED_RATINGS",
    "TAG_DATE_TIME_ORIGINAL",
    "TAG_FLASH",
    "TAG_FOCAL_LENGTH",
    "TAG_EXPOSURE_MODE",
    "TAG_FOCAL_LENGTH_IN_35MM_FILM",
    "TAG_LENS_MODEL",
    "TAG_GPS_LATITUDE_REF",
    "TAG_GPS_LATITUDE",
    "TAG_GPS_LONGITUDE_REF",
    "TAG_GPS_LONGITUDE",
    "TAG_GPS_MAP_DATUM",
    "NIKON_MAKES",
    "ExifData",
    "trim_spaces",
    "tag_line",
    "tag_content",
    "mnote_tag",
    "make_model_lens",
    "exposure",
    "flash",
    "mode",
    "datetime_line",
    "description",
    "gps_coords",
    "canon_mnote_tags",
    "load_exif",
    "exif_info",
]

EXIF_MAX_DATA = 1024
EXIF_STD_BUF_LEN = 128

IFD_0 = 0
IFD_EXIF = 2
IFD_GPS = 3

TAG_IMAGE_DESCRIPTION = 0x010E
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_EXPOSURE_TIME = 0x829A
TAG_FNUMBER = 0x829D
TAG_EXPOSURE_PROGRAM = 0x8822
TAG_ISO_SPEED_RATINGS = 0x8827
TAG_DATE_TIME_ORIGINAL = 0x9003
TAG_FLASH = 0x9209
TAG_FOCAL_LENGTH = 0x920A
TAG_EXPOSURE_MODE = 0xA402
TAG_FOCAL_LENGTH_IN_35MM_FILM = 0xA405
TAG_LENS_MODEL = 0xA434

TAG_GPS_LATITUDE_REF = 0x0001
TAG_GPS_LATITUDE = 0x0002
TAG_GPS_LONGITUDE_REF = 0x0003
TAG_GPS_LONGITUDE = 0x0004
TAG_GPS_MAP_DATUM = 0x0012

NIKON_MAKES = ("NIKON CORPORATION", "Nikon", "NIKON")

_EXIF_POINTER = 0x8769
_GPS_POINTER = 0x8825
_MAKERNOTE = 0x927C

_NAMES: Dict[Tuple[int, int], str] = {
    (IFD_0, TAG_IMAGE_DESCRIPTION): "ImageDescription",
    (IFD_0, TAG_MAKE): "Make",
    (IFD_0, TAG_MODEL): "Model",
    (IFD_EXIF, TAG_EXPOSURE_TIME): "ExposureTime",
    (IFD_EXIF, TAG_FNUMBER): "FNumber",
    (IFD_EXIF, TAG_EXPOSURE_PROGRAM): "ExposureProgram",
    (IFD_EXIF, TAG_ISO_SPEED_RATINGS): "ISOSpeedRatings",
    (IFD_EXIF, TAG_DATE_TIME_ORIGINAL): "DateTimeOriginal",
    (IFD_EXIF, TAG_FLASH): "Flash",
    (IFD_EXIF, TAG_FOCAL_LENGTH): "FocalLength",
    (IFD_EXIF, TAG_EXPOSURE_MODE): "ExposureMode",
    (IFD_EXIF, TAG_FOCAL_LENGTH_IN_35MM_FILM): "FocalLengthIn35mmFilm",
    (IFD_EXIF, TAG_LENS_MODEL): "LensModel",
    (IFD_GPS, TAG_GPS_LATITUDE_REF): "GPSLatitudeRef",
    (IFD_GPS, TAG_GPS_LATITUDE): "GPSLatitude",
    (IFD_GPS, TAG_GPS_LONGITUDE_REF): "GPSLongitudeRef",
    (IFD_GPS, TAG_GPS_LONGITUDE): "GPSLongitude",
    (IFD_GPS, TAG_GPS_MAP_DATUM): "GPSMapDatum",
}

_FLASH_VALUES = {
    0x00: "Flash did not fire",
    0x01: "Flash fired",
    0x05: "Strobe return light not detected",
    0x07: "Strobe return light detected",
    0x08: "Flash did not fire",
    0x09: "Flash fired, compulsory flash mode",
    0x0D: "Flash fired, compulsory flash mode, return light not detected",
    0x0F: "Flash fired, compulsory flash mode, return light detected",
    0x10: "Flash did not fire, compulsory flash mode",
    0x18: "Flash did not fire, auto mode",
    0x19: "Flash fired, auto mode",
    0x1D: "Flash fired, auto mode, return light not detected",
    0x1F: "Flash fired, auto mode, return light detected",
    0x20: "No flash function",
    0x41: "Flash fired, red-eye reduction mode",
    0x45: "Flash fired, red-eye reduction mode, return light not detected",
    0x47: "Flash fired, red-eye reduction mode, return light detected",
    0x49: "Flash fired, compulsory flash mode, red-eye reduction mode",
    0x59: "Flash fired, auto mode, red-eye reduction mode",
}

_EXPOSURE_MODES = {0: "Auto exposure", 1: "Manual exposure", 2: "Auto bracket"}

_EXPOSURE_PROGRAMS = {
    0: "Not defined",
    1: "Manual",
    2: "Normal program",
    3: "Aperture priority",
    4: "Shutter priority",
    5: "Creative program (biased toward depth of field)",
    6: "Creative program (biased toward fast shutter speed)",
    7: "Portrait mode (for closeup photos with the background out of focus)",
    8: "Landscape mode (for landscape photos with the background in focus)",
}


@dataclass
class ExifData:
    """EXIF entries already rendered as text.

    ``ifds`` maps an IFD number to a mapping of tag numbers to values;
    ``makernote`` holds ``(id, title, value)`` triples in file order.
    """

    ifds: Dict[int, Dict[int, str]] = field(default_factory=dict)
    makernote: List[Tuple[int, str, str]] = field(default_factory=list)

    def value(self, ifd: int, tag: int) -> Optional[str]:
        """Return the text of an entry, or ``None`` if it is absent."""
        found = self.ifds.get(ifd, {}).get(tag)
        return None if found is None else found[: EXIF_MAX_DATA - 1]

    def tag_name(self, ifd: int, tag: int) -> str:
        """Return the conventional name of a tag within an IFD."""
        name = _NAMES.get((ifd, tag))
        if name is not None:
            return name
        table = ExifTags.GPSTAGS if ifd == IFD_GPS else ExifTags.TAGS
        return table.get(tag, f"0x{tag:04x}")

    def mnote(self, tag: int) -> List[Tuple[str, str]]:
        """Return ``(title, value)`` for every maker note entry with ``tag``."""
        return [(title, text) for ident, title, text in self.makernote if ident == tag]


def trim_spaces(text: str) -> str:
    """Remove space characters from the right end of ``text``."""
    return text.rstrip(" ")


def _clip(text: str, size: int) -> str:
    return text[: size - 1]


def tag_line(data: Optional[ExifData], ifd: int, tag: int) -> str:
    """Return ``"Name: value\\n"`` for a non-blank entry, else ``""``."""
    if data is None:
        return ""
    raw = data.value(ifd, tag)
    if raw is None:
        return ""
    text = trim_spaces(raw)
    if not text:
        return ""
    return f"{data.tag_name(ifd, tag)}: {text}\n"


def tag_content(data: Optional[ExifData], ifd: int, tag: int) -> str:
    """Return the trimmed value of an entry, or ``""`` if absent or blank."""
    if data is None:
        return ""
    raw = data.value(ifd, tag)
    if raw is None:
        return ""
    return trim_spaces(raw)


def _content(data: Optional[ExifData], ifd: int, tag: int) -> str:
    return _clip(tag_content(data, ifd, tag), EXIF_STD_BUF_LEN)


def mnote_tag(data: Optional[ExifData], tag: int) -> str:
    """Return ``"Title: value\\n"`` for a maker note tag.

    When the tag occurs several times, the last non-blank entry wins.
    """
    if data is None:
        return ""
    result = ""
    for title, raw in data.mnote(tag):
        text = trim_spaces(raw[:1023])
        if text:
            result = f"{title}: {text}\n"
    return result


def make_model_lens(data: Optional[ExifData]) -> str:
    """Return camera make, model and lens on one line."""
    make = _content(data, IFD_0, TAG_MAKE)
    model = _content(data, IFD_0, TAG_MODEL)
    lens = _content(data, IFD_EXIF, TAG_LENS_MODEL)
    out = ""
    if make and not model.startswith(make):
        out += f"{make} "
    if model:
        out += model
    if lens:
        out += f" + {lens}"
    return out + "\n"


def exposure(data: Optional[ExifData]) -> str:
    """Return aperture, exposure time, ISO and focal length."""
    fnumber = _content(data, IFD_EXIF, TAG_FNUMBER)
    exposure_time = _content(data, IFD_EXIF, TAG_EXPOSURE_TIME)
    iso = _content(data, IFD_EXIF, TAG_ISO_SPEED_RATINGS)
    focus = _content(data, IFD_EXIF, TAG_FOCAL_LENGTH)
    focus35 = _content(data, IFD_EXIF, TAG_FOCAL_LENGTH_IN_35MM_FILM)
    out = ""
    if fnumber or exposure_time:
        out += f"{fnumber}  {exposure_time}  "
    if iso:
        out += f"ISO{iso}  "
    if focus and focus35:
        out += f"{focus} ({focus35} mm)\n"
    elif focus:
        out += f"{focus}\n"
    return out


def flash(data: Optional[ExifData]) -> str:
    """Return the flash entry as a line, or ``""``."""
    value = _content(data, IFD_EXIF, TAG_FLASH)
    return f"{value}\n" if value else ""


def mode(data: Optional[ExifData]) -> str:
    """Return exposure mode and program as a line, or ``""``."""
    exposure_mode = _content(data, IFD_EXIF, TAG_EXPOSURE_MODE)
    program = _content(data, IFD_EXIF, TAG_EXPOSURE_PROGRAM)
    if exposure_mode or program:
        return f"{exposure_mode} ({program})\n"
    return ""


def datetime_line(data: Optional[ExifData]) -> str:
    """Return the original capture time as a line, or ``""``."""
    value = _content(data, IFD_EXIF, TAG_DATE_TIME_ORIGINAL)
    return f"{value}\n" if value else ""


def description(data: Optional[ExifData]) -> str:
    """Return the quoted image description as a line, or ``""``."""
    value = _content(data, IFD_0, TAG_IMAGE_DESCRIPTION)
    return f'"{value}"\n' if value else ""


def gps_coords(data: Optional[ExifData]) -> str:
    """Return GPS coordinates; stops at the first missing component."""
    pieces = (
        (TAG_GPS_LATITUDE_REF, "GPS: {} "),
        (TAG_GPS_LATITUDE, "{} "),
        (TAG_GPS_LONGITUDE_REF, ", {} "),
        (TAG_GPS_LONGITUDE, "{} "),
        (TAG_GPS_MAP_DATUM, "({})\n"),
    )
    out = ""
    for tag, template in pieces:
        value = _content(data, IFD_GPS, tag)
        if not value:
            break
        out += template.format(value)
    return out


def canon_mnote_tags(data: Optional[ExifData], tag: int) -> str:
    """Return a Canon maker note tag in readable form."""
    return mnote_tag(data, tag)


def _scalar(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1").rstrip("\x00")
    if isinstance(value, str):
        return value.rstrip("\x00")
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        try:
            return f"{float(value):g}"
        except ZeroDivisionError:
            return "0"
    return str(value)


def _as_float(value: object) -> Optional[float]:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, ZeroDivisionError):
        return None


def _format(ifd: int, tag: int, value: object) -> str:
    if ifd == IFD_EXIF:
        if tag == TAG_FLASH and isinstance(value, int):
            return _FLASH_VALUES.get(value, str(value))
        if tag == TAG_EXPOSURE_MODE and isinstance(value, int):
            return _EXPOSURE_MODES.get(value, str(value))
        if tag == TAG_EXPOSURE_PROGRAM and isinstance(value, int):
            return _EXPOSURE_PROGRAMS.get(value, str(value))
        number = _as_float(value) if not isinstance(value, (str, bytes, tuple)) else None
        if number is not None:
            if tag == TAG_FNUMBER:
                return f"f/{number:.1f}"
            if tag == TAG_FOCAL_LENGTH:
                return f"{number:.1f} mm"
            if tag == TAG_EXPOSURE_TIME:
                if 0 < number < 1:
                    return f"1/{round(1 / number)} sec."
                return f"{number:g} sec."
    if isinstance(value, (tuple, list)):
        return ", ".join(_scalar(item) for item in value)
    return _scalar(value)


def _render_ifd(ifd: int, entries: Iterable[Tuple[int, object]]) -> Dict[int, str]:
    return {tag: _format(ifd, tag, value) for tag, value in entries}


def load_exif(path: str) -> Optional[ExifData]:
    """Read EXIF data from an image file.

    Returns ``None`` if the file cannot be read or carries no EXIF data.
    """
    try:
        with Image.open(path) as image:
            exif = image.getexif()
            if not exif:
                return None
            ifd0 = _render_ifd(
                IFD_0,
                ((tag, value) for tag, value in exif.items()
                 if tag not in (_EXIF_POINTER, _GPS_POINTER)),
            )
            exif_ifd = _render_ifd(
                IFD_EXIF,
                ((tag, value) for tag, value in exif.get_ifd(_EXIF_POINTER).items()
                 if tag != _MAKERNOTE),
            )
            gps_ifd = _render_ifd(IFD_GPS, exif.get_ifd(_GPS_POINTER).items())
            makernote: List[Tuple[int, str, str]] = []
            try:
                for tag, value in exif.get_ifd(_MAKERNOTE).items():
                    makernote.append((tag, f"0x{tag:04x}", _format(-1, tag, value)))
            except Exception:  # unsupported or damaged maker notes are skipped
                makernote = []
    except (OSError, UnidentifiedImageError, ValueError):
        return None
    ifds = {IFD_0: ifd0}
    if exif_ifd:
        ifds[IFD_EXIF] = exif_ifd
    if gps_ifd:
        ifds[IFD_GPS] = gps_ifd
    return ExifData(ifds=ifds, makernote=makernote)


def exif_info(
    data: Optional[ExifData],
    nikon_tags: Iterable[int] = (),
    canon_tags: Iterable[int] = (),
    nikon_formatter: Optional[Callable[[ExifData, int], str]] = None,
) -> str:
    """Return all interesting EXIF data as readable text.

    Vendor maker note tags are listed for Nikon and Canon cameras;
    ``nikon_formatter`` renders a Nikon tag and defaults to the plain form.
    """
    if data is None:
        return "No Exif data in file.\n"
    out = (
        description(data)
        + make_model_lens(data)
        + exposure(data)
        + mode(data)
        + flash(data)
        + datetime_line(data)
    )
    raw_make = data.value(IFD_0, TAG_MAKE)
    if raw_make is not None:
        make = trim_spaces(_clip(raw_make, EXIF_STD_BUF_LEN))
        if make in NIKON_MAKES:
            render = nikon_formatter if nikon_formatter is not None else mnote_tag
            for tag in nikon_tags:
                out += render(data, tag)
        elif make == "Canon":
            for tag in canon_tags:
                out += canon_mnote_tags(data, tag)
    return out + gps_coords(data)