"""Merging scanner output back into the running answers."""
from checkmaster.core.models import AIResult, Template
from checkmaster.runner.merge import apply_extraction, normalize_plate


def test_merge_normalizes_plate_and_keeps_first_imei(inspection_template: Template):
    result = AIResult(placa="abc-1234", marca="Fiat", modelo="Uno", imei=["123456789012345", "999"])

    merged = apply_extraction(inspection_template.fields, {}, result)

    assert merged["plate"] == "ABC1234"
    assert merged["vehicle"] == "Fiat Uno"
    assert merged["imei"] == "123456789012345"


def test_merge_does_not_mutate_current_answers(inspection_template: Template):
    current = {"owner": "Ana", "plate": "typed"}
    merged = apply_extraction(inspection_template.fields, current, AIResult(placa="XYZ9A87"))
    assert current == {"owner": "Ana", "plate": "typed"}
    assert merged["plate"] == "XYZ9A87"
    assert merged["owner"] == "Ana"


def test_extraction_overwrites_user_answers(inspection_template: Template):
    current = {"vehicle": "Typed by hand", "imei": "111"}
    merged = apply_extraction(inspection_template.fields, current, AIResult(marca="VW", modelo="Gol", imei=["222"]))
    assert merged["vehicle"] == "VW Gol"
    assert merged["imei"] == "222"


def test_empty_plate_and_imei_leave_fields_alone(inspection_template: Template):
    current = {"plate": "ABC1234", "imei": "111"}
    merged = apply_extraction(inspection_template.fields, current, AIResult(placa="", imei=[]))
    assert merged["plate"] == "ABC1234"
    assert merged["imei"] == "111"


def test_vehicle_info_with_one_half_missing(inspection_template: Template):
    fields = inspection_template.fields
    assert apply_extraction(fields, {}, AIResult(modelo="Uno"))["vehicle"] == "Uno"
    assert apply_extraction(fields, {}, AIResult(marca="Fiat", modelo=""))["vehicle"] == "Fiat"
    assert apply_extraction(fields, {"vehicle": "x"}, AIResult())["vehicle"] == ""


def test_other_field_types_untouched(inspection_template: Template):
    current = {"owner": "Ana", "washed": True, "service": "inst", "extras": ["relay"], "manual": "10"}
    merged = apply_extraction(inspection_template.fields, current, AIResult(placa="AAA0A00"))
    for key, value in current.items():
        assert merged[key] == value


def test_normalize_plate_handles_mercosul_format():
    assert normalize_plate(" bra 2e19 ") == "BRA2E19"
    assert normalize_plate("ç-12") == "12"
