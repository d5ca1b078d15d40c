import re

from records.services import ids


def test_identifier_shape():
    value = ids.generate_unique_id(ids.PATIENT)
    assert re.fullmatch(r'PAT-[0-9A-Z]+-[0-9A-Z]{6}', value)


def test_time_component_is_base36_millis():
    assert ids.generate_unique_id(ids.VISIT, now_ms=0).startswith('VISIT-0-')
    assert ids.generate_unique_id(ids.HOSPITAL, now_ms=36).startswith('HOSP-10-')
    assert ids.generate_unique_id(ids.STOCK_ALERT, now_ms=35).startswith('ALERT-Z-')


def test_same_millisecond_still_distinct():
    values = {ids.generate_unique_id(ids.EMERGENCY_ALERT, now_ms=1700000000000) for _ in range(200)}
    assert len(values) == 200
