import pytest

from records.exceptions import MissingField, NotFound
from records.models import AlertStatus, EmergencyAlert, EmergencyAlertAcknowledgement, StockAlertAcknowledgement
from records.services.blood_bank import BloodInventoryLedger, CriticalStockAlertTracker, format_stock_alert
from records.services.emergency import EmergencyAlertBroadcaster, format_emergency_alert

pytestmark = pytest.mark.django_db


@pytest.fixture
def broadcaster(notifications):
    return EmergencyAlertBroadcaster(notify=notifications.append)


def test_emergency_defaults_and_notification(broadcaster, hospital, notifications):
    alert = broadcaster.create(hospital, 'Mass casualty incident, need O- donors')
    assert alert.alert_type == 'general'
    assert alert.priority == 'medium'
    assert alert.status == AlertStatus.ACTIVE
    assert alert.alert_id.startswith('EMRG-')
    (sent,) = notifications
    assert sent['alertId'] == alert.alert_id
    assert sent['hospitalName'] == 'City General'
    assert sent['type'] == 'general' and sent['priority'] == 'medium'
    assert set(sent) == {'alertId', 'hospitalName', 'message', 'type', 'priority', 'timestamp'}


def test_emergency_requires_message(broadcaster, hospital, notifications):
    with pytest.raises(MissingField):
        broadcaster.create(hospital, '')
    assert not EmergencyAlert.objects.exists()
    assert notifications == []


def test_emergency_acknowledgements_keep_order_and_status(broadcaster, hospital, other_hospital):
    alert = broadcaster.create(hospital, 'Power outage', alert_type='infrastructure', priority='high')
    broadcaster.acknowledge(alert.alert_id, hospital_code=other_hospital.hospital_id,
                            hospital_name=other_hospital.name, response='Sending generators')
    broadcaster.acknowledge(alert.alert_id, hospital_code='HOSP-X', hospital_name='Harbour')
    alert.refresh_from_db()
    assert alert.status == AlertStatus.ACTIVE
    acks = format_emergency_alert(alert)['acknowledgedBy']
    assert [a['hospitalName'] for a in acks] == ['County Clinic', 'Harbour']
    assert acks[0]['response'] == 'Sending generators'
    assert acks[1]['response'] == ''


def test_acknowledging_unknown_alert_writes_nothing(broadcaster):
    with pytest.raises(NotFound):
        broadcaster.acknowledge('EMRG-NOPE-000000', hospital_code='HOSP-1')
    with pytest.raises(NotFound):
        CriticalStockAlertTracker(threshold=10, notify=lambda p: None).acknowledge('ALERT-NOPE-000000')
    assert not EmergencyAlertAcknowledgement.objects.exists()
    assert not StockAlertAcknowledgement.objects.exists()


def test_resolved_stock_alert_can_still_be_acknowledged(hospital, other_hospital, notifications):
    tracker = CriticalStockAlertTracker(threshold=10, notify=notifications.append)
    ledger = BloodInventoryLedger(tracker=tracker)
    alert = ledger.set(hospital, 'AB-', 1).raised_alert
    ledger.add(hospital, 'AB-', 20)
    tracker.acknowledge(alert.alert_id, hospital_code=other_hospital.hospital_id,
                        hospital_name=other_hospital.name, response='Can spare 5 units')
    alert.refresh_from_db()
    assert alert.status == AlertStatus.RESOLVED
    data = format_stock_alert(alert)
    assert data['acknowledgedBy'][0]['hospitalId'] == other_hospital.hospital_id
    assert data['resolvedAt'] is not None


def test_active_lists_are_newest_first(broadcaster, hospital, notifications):
    tracker = CriticalStockAlertTracker(threshold=10, notify=notifications.append)
    ledger = BloodInventoryLedger(tracker=tracker)
    ledger.set(hospital, 'A+', 1)
    ledger.set(hospital, 'B+', 1)
    assert [a.blood_type for a in tracker.active_alerts()] == ['B+', 'A+']

    first = broadcaster.create(hospital, 'first')
    second = broadcaster.create(hospital, 'second')
    assert [a.alert_id for a in broadcaster.active_alerts()] == [second.alert_id, first.alert_id]
