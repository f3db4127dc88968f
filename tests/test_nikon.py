import pytest

from fehlib.exifinfo import IFD_EXIF, TAG_FLASH, ExifData, mnote_tag
from fehlib.nikon import (
    PRIMARY_AF_POINT_11,
    PRIMARY_AF_POINT_39,
    PRIMARY_AF_POINT_51,
    active_d_lighting,
    af_info,
    flash_control_mode,
    flash_exposure_compensation,
    flash_output,
    nikon_mnote_tags,
    picture_control,
    primary_af_point,
)


def _data(*entries, flash=None):
    ifds = {IFD_EXIF: {TAG_FLASH: flash}} if flash is not None else {}
    return ExifData(ifds=ifds, makernote=list(entries))


def _unknown(tag, length, hex_body):
    return (tag, "title", f"{length} bytes unknown data: 303130{hex_body}")


def _name_hex(name):
    return name.encode("latin-1").ljust(20, b"\x00").hex().upper()


def test_primary_af_point_special_cases():
    assert primary_af_point(0, 1) == "FAIL"
    assert primary_af_point(7, 1) == "?"


@pytest.mark.parametrize(
    "system, table",
    [(1, PRIMARY_AF_POINT_51), (2, PRIMARY_AF_POINT_11), (3, PRIMARY_AF_POINT_39)],
)
def test_primary_af_point_tables(system, table):
    assert [primary_af_point(system, i) for i in range(len(table))] == list(table)
    assert primary_af_point(system, len(table)) == ""


def test_primary_af_point_known_names():
    assert primary_af_point(1, 1) == "C6 (Center)"
    assert primary_af_point(2, 1) == "Center"
    assert primary_af_point(3, 0) == "(none)"


def test_flash_output_full():
    assert flash_output(0) == "Full"


def test_flash_output_powers_of_two():
    assert flash_output(6) == "1/2"
    for k in range(1, 6):
        assert flash_output(6 * k) == f"1/{2 ** k}"


def test_flash_output_uneven():
    result = flash_output(7)
    assert result.startswith("1/2^(")
    assert result.endswith(")")
    assert float(result[5:-1]) == pytest.approx(7 / 6, abs=1e-6)


def test_flash_exposure_compensation_negative():
    result = flash_exposure_compensation(_data((18, "t", "-1.0")))
    assert result.startswith("FlashExposureCompensation: ")
    assert result.endswith("-1.0 EV\n")


def test_flash_exposure_compensation_rounds_to_sixths():
    assert flash_exposure_compensation(_data((18, "t", "0.33"))).endswith("+0.3 EV\n")


def test_flash_exposure_compensation_missing_is_zero():
    missing = flash_exposure_compensation(_data())
    explicit = flash_exposure_compensation(_data((18, "t", "0")))
    assert missing == explicit


@pytest.mark.parametrize(
    "raw, answer",
    [("0", "Off"), ("1", "Low"), ("3", "Normal"), ("5", "High"),
     ("7", "Extra High"), ("65535", "Auto"), ("2", "N/A")],
)
def test_active_d_lighting(raw, answer):
    result = active_d_lighting(_data((34, "t", raw)))
    assert result.startswith("Active D-Lightning: ")
    assert result[len("Active D-Lightning: "):-1] == answer


def test_active_d_lighting_missing_defaults_to_off():
    assert active_d_lighting(_data()).endswith("Off\n")


def test_picture_control_full_record():
    body = "30" + _name_hex("STANDARD") + _name_hex("NEUTRAL   ") + "ABCDEF01" + "01020304050607"
    result = picture_control(_data(_unknown(35, 58, body)))
    assert result.startswith("PictCtrlData: ")
    assert "Name: STANDARD;" in result
    assert "Base: NEUTRAL;" in result
    assert "Quick Adjust" in result
    assert "Quick: 2;" in result
    assert "Hue: 7\n" in result


def test_picture_control_wrong_length_is_empty():
    body = "30" + _name_hex("STANDARD") + _name_hex("NEUTRAL") + "ABCDEF01" + "01020304050607"
    assert picture_control(_data(_unknown(35, 57, body))) == ""


def test_picture_control_invalid_adjustment_is_empty():
    body = "30" + _name_hex("STANDARD") + _name_hex("NEUTRAL") + "ABCDEF01" + "03020304050607"
    assert picture_control(_data(_unknown(35, 58, body))) == ""


@pytest.mark.parametrize("length, version", [(22, "33"), (22, "34"), (21, "32"), (19, "30")])
def test_flash_control_mode_versions(length, version):
    body = version + "00000000" + "00" + "81" + "0C" + "00"
    result = flash_control_mode(_data(_unknown(168, length, body)))
    assert result.startswith("NikonFlashControlMode: iTTL-BL")
    assert f"(Power: {flash_output(12)})" in result


def test_flash_control_mode_unknown_version_is_empty():
    body = "35" + "00000000" + "00" + "01" + "00" + "00"
    assert flash_control_mode(_data(_unknown(168, 22, body))) == ""


def test_flash_control_mode_truncated_record_reports_na():
    result = flash_control_mode(_data(_unknown(168, 19, "30")))
    assert "N/A" in result
    assert "Full" in result


def test_af_info_phase_detect():
    body = "30" + "00" + "01" + "01" + "01"
    result = af_info(_data(_unknown(183, 30, body)))
    assert result.startswith("PhaseDetectAF: On (51-point)")
    assert "Dynamic Area;" in result
    assert result.endswith("PrimaryAFPoint: C6 (Center)\n")


def test_af_info_contrast_detect():
    body = "30" + "01" + "02" + "00" + "00"
    result = af_info(_data(_unknown(183, 30, body)))
    assert result.startswith("ContrastDetectAF: On")
    assert "Contrast-detect (wide area)" in result


def test_af_info_rejects_bad_values():
    assert af_info(_data(_unknown(183, 29, "3000010101"))) == ""
    assert af_info(_data(_unknown(183, 30, "3002010101"))) == ""
    assert af_info(_data(_unknown(183, 30, "3000000000"))) == ""


def test_nikon_flash_tags_hidden_when_flash_did_not_fire():
    data = _data((8, "Flash Setting", "NORMAL"), (18, "t", "-1.0"),
                 flash="Flash did not fire")
    assert nikon_mnote_tags(data, 8) == ""
    assert nikon_mnote_tags(data, 18) == ""
    assert nikon_mnote_tags(data, 168) == ""


def test_nikon_flash_tags_shown_when_flash_fired():
    data = _data((8, "Flash Setting", "NORMAL"), (18, "t", "-1.0"), flash="Flash fired")
    assert nikon_mnote_tags(data, 8) == mnote_tag(data, 8)
    assert "NORMAL" in nikon_mnote_tags(data, 8)
    assert nikon_mnote_tags(data, 18) == flash_exposure_compensation(data)


def test_nikon_dispatch_to_special_formatters():
    data = _data((34, "t", "5"), _unknown(183, 30, "3000010101"))
    assert nikon_mnote_tags(data, 34) == active_d_lighting(data)
    assert nikon_mnote_tags(data, 183) == af_info(data)


def test_nikon_default_tag_uses_plain_form():
    data = _data((5, "White Balance", "AUTO  "))
    assert nikon_mnote_tags(data, 5) == mnote_tag(data, 5)
    assert "AUTO\n" in nikon_mnote_tags(data, 5)