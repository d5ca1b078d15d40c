"""
Blood bank inventory and the critical-stock alert lifecycle.

:class:`BloodInventoryLedger` owns the unit count of every
(hospital, blood type) pair.  After each mutation it asks the
:class:`CriticalStockAlertTracker` to compare the new count with the
threshold:

* below the threshold and no active alert for the pair -> a new alert
  is created (snapshotting the count) and broadcast to connected clients;
* at or above the threshold -> every active alert of the pair is resolved.

Reads and writes are not locked against concurrent requests on the same
pair, so two simultaneous removals may each create an alert.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from records.exceptions import InsufficientStock, InvalidQuantity
from records.models import (
    AlertStatus,
    BloodStock,
    CriticalStockAlert,
    Hospital,
    StockAlertAcknowledgement,
)
from records.services import ids
from records.services.acknowledgements import acknowledge, format_acknowledgements
from records.services.broadcast import broadcast_stock_critical

logger = logging.getLogger(__name__)

Notifier = Callable[[dict], object]

# Largest count a PositiveIntegerField holds on every supported backend.
MAX_UNITS = 2 ** 31 - 1


def _check_units(units, *, allow_zero: bool) -> int:
    if isinstance(units, bool) or not isinstance(units, int):
        raise InvalidQuantity('Units must be a whole number.')
    if units < 0 or (units == 0 and not allow_zero):
        raise InvalidQuantity('Units must be positive.' if not allow_zero else 'Units cannot be negative.')
    if units > MAX_UNITS:
        raise InvalidQuantity(f'Units cannot exceed {MAX_UNITS}.')
    return units


@dataclass
class StockChange:
    """Outcome of one ledger operation."""
    stock: BloodStock
    raised_alert: Optional[CriticalStockAlert] = None
    resolved_alerts: int = 0


class CriticalStockAlertTracker:
    def __init__(self, threshold: Optional[int] = None, notify: Optional[Notifier] = None):
        self.threshold = settings.BLOOD_THRESHOLD if threshold is None else threshold
        self.notify = notify or broadcast_stock_critical

    def is_critical(self, units: int) -> bool:
        return units < self.threshold

    def active_for(self, hospital: Hospital, blood_type: str):
        return CriticalStockAlert.objects.filter(
            hospital=hospital, blood_type=blood_type, status=AlertStatus.ACTIVE,
        )

    def raise_alert(self, hospital: Hospital, blood_type: str, units: int) -> Optional[CriticalStockAlert]:
        """Create an active alert for the pair unless one already exists."""
        if self.active_for(hospital, blood_type).exists():
            return None
        alert = CriticalStockAlert.objects.create(
            alert_id=ids.generate_unique_id(ids.STOCK_ALERT),
            hospital=hospital,
            hospital_name=hospital.name,
            blood_type=blood_type,
            current_units=units,
            threshold=self.threshold,
        )
        logger.warning('Critical stock %s at %s: %s units (threshold %s), alert %s',
                       blood_type, hospital.hospital_id, units, self.threshold, alert.alert_id)
        return alert

    def resolve(self, hospital: Hospital, blood_type: str) -> int:
        """Resolve every active alert of the pair; returns the number updated."""
        count = self.active_for(hospital, blood_type).update(
            status=AlertStatus.RESOLVED, resolved_at=timezone.now(),
        )
        if count:
            logger.info('Resolved %s stock alert(s) for %s at %s', count, blood_type, hospital.hospital_id)
        return count

    def announce(self, alert: CriticalStockAlert) -> None:
        self.notify({
            'alertId': alert.alert_id,
            'hospitalId': alert.hospital.hospital_id,
            'hospitalName': alert.hospital_name,
            'bloodType': alert.blood_type,
            'currentUnits': alert.current_units,
        })

    def acknowledge(self, alert_id: str, *, hospital_code: str = '', hospital_name: str = '',
                    response: Optional[str] = None) -> CriticalStockAlert:
        return acknowledge(
            CriticalStockAlert, StockAlertAcknowledgement, alert_id,
            hospital_code=hospital_code, hospital_name=hospital_name, response=response,
        )

    def active_alerts(self):
        return (
            CriticalStockAlert.objects.filter(status=AlertStatus.ACTIVE)
            .select_related('hospital')
            .prefetch_related('acknowledgements')
            .order_by('-created_at', '-id')
        )


class BloodInventoryLedger:
    """Add, remove and set units per (hospital, blood type) pair."""

    def __init__(self, threshold: Optional[int] = None, tracker: Optional[CriticalStockAlertTracker] = None):
        self.tracker = tracker or CriticalStockAlertTracker(threshold)

    @property
    def threshold(self) -> int:
        return self.tracker.threshold

    def stock_for(self, hospital: Hospital):
        return BloodStock.objects.filter(hospital=hospital).order_by('blood_type')

    def _get(self, hospital: Hospital, blood_type: str) -> Optional[BloodStock]:
        return BloodStock.objects.filter(hospital=hospital, blood_type=blood_type).first()

    def _write(self, hospital: Hospital, blood_type: str, stock: Optional[BloodStock], units: int) -> BloodStock:
        now = timezone.now()
        if stock is None:
            return BloodStock.objects.create(
                hospital=hospital, blood_type=blood_type, available_units=units, last_updated=now,
            )
        stock.available_units = units
        stock.last_updated = now
        stock.save(update_fields=['available_units', 'last_updated'])
        return stock

    def _finish(self, change: StockChange) -> StockChange:
        if change.raised_alert is not None:
            self.tracker.announce(change.raised_alert)
        return change

    def add(self, hospital: Hospital, blood_type: str, units) -> StockChange:
        units = _check_units(units, allow_zero=False)
        with transaction.atomic():
            stock = self._get(hospital, blood_type)
            current = stock.available_units if stock else 0
            if current + units > MAX_UNITS:
                raise InvalidQuantity(f'Stock cannot exceed {MAX_UNITS} units.')
            stock = self._write(hospital, blood_type, stock, current + units)
            change = StockChange(stock)
            if not self.tracker.is_critical(stock.available_units):
                change.resolved_alerts = self.tracker.resolve(hospital, blood_type)
        return self._finish(change)

    def remove(self, hospital: Hospital, blood_type: str, units) -> StockChange:
        units = _check_units(units, allow_zero=False)
        with transaction.atomic():
            stock = self._get(hospital, blood_type)
            if stock is None or stock.available_units < units:
                raise InsufficientStock('Insufficient units')
            stock = self._write(hospital, blood_type, stock, stock.available_units - units)
            change = StockChange(stock)
            if self.tracker.is_critical(stock.available_units):
                change.raised_alert = self.tracker.raise_alert(hospital, blood_type, stock.available_units)
        return self._finish(change)

    def set(self, hospital: Hospital, blood_type: str, units) -> StockChange:
        units = _check_units(units, allow_zero=True)
        with transaction.atomic():
            stock = self._write(hospital, blood_type, self._get(hospital, blood_type), units)
            change = StockChange(stock)
            if self.tracker.is_critical(units):
                change.raised_alert = self.tracker.raise_alert(hospital, blood_type, units)
            else:
                change.resolved_alerts = self.tracker.resolve(hospital, blood_type)
        return self._finish(change)


def format_stock(stock: BloodStock) -> dict:
    return {
        'hospitalId': stock.hospital.hospital_id,
        'bloodType': stock.blood_type,
        'availableUnits': stock.available_units,
        'lastUpdated': stock.last_updated.isoformat(),
    }


def format_stock_alert(alert: CriticalStockAlert) -> dict:
    return {
        'alertId': alert.alert_id,
        'hospitalId': alert.hospital.hospital_id,
        'hospitalName': alert.hospital_name,
        'bloodType': alert.blood_type,
        'currentUnits': alert.current_units,
        'threshold': alert.threshold,
        'status': alert.status,
        'createdAt': alert.created_at.isoformat(),
        'resolvedAt': alert.resolved_at.isoformat() if alert.resolved_at else None,
        'acknowledgedBy': format_acknowledgements(alert),
    }
