from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Sequence, Union

from ..common.datetime_utils import require_iso_date
from ..common.validators import optional_text, parse_flag, parse_quantity
from ..core.enums import RecordMode, RecordType
from ..core.exceptions import ValidationError
from ..records.model import RecordDraft, WorkRecord
from ..records.service import RecordService
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryForm:
    """Raw values of the new-record form, as typed by the driver."""

    work_date: Union[str, date, None]
    mode: str = RecordMode.INDIVIDUAL.value
    parcels: Optional[str] = None
    collections: Optional[str] = None
    daily_quantity: Optional[str] = None
    is_two_ids: bool = False
    route_id_1: Optional[str] = None
    route_id_2: Optional[str] = None
    photos: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Mapping, *, photos: Sequence[str] = ()) -> "EntryForm":
        return cls(
            work_date=data.get("date"),
            mode=(data.get("mode") or RecordMode.INDIVIDUAL.value),
            parcels=data.get("parcels"),
            collections=data.get("collections"),
            daily_quantity=data.get("quantity"),
            is_two_ids=parse_flag(data.get("isTwoIDs")),
            route_id_1=data.get("routeId1"),
            route_id_2=data.get("routeId2"),
            photos=tuple(photos),
        )


class EntryService:
    """Use case: turn one form submission into priced work records.

    An individual submission yields up to two records (parcels, collections),
    created concurrently. A daily submission yields one DAILY_FLAT record.
    """

    def __init__(
        self,
        records: RecordService,
        *,
        calculator: Optional[PayCalculator] = None,
        max_workers: int = 2,
    ):
        self._records = records
        self._calculator = calculator or StandardPayCalculator()
        self._max_workers = max_workers

    @staticmethod
    def _mode(form: EntryForm) -> RecordMode:
        try:
            return RecordMode(str(form.mode).upper())
        except ValueError:
            raise ValidationError("Modo inválido")

    def preview(self, form: EntryForm) -> float:
        """Value the form is worth right now; nothing is saved."""
        if self._mode(form) == RecordMode.INDIVIDUAL:
            parcels = parse_quantity(form.parcels, "Parcelas")
            collections = parse_quantity(form.collections, "Coletas")
            return self._calculator.calculate_individual(parcels, collections).total

        qty = parse_quantity(form.daily_quantity, "Quantidade")
        return self._calculator.calculate_daily(form.is_two_ids, qty)

    def build_drafts(self, user_id: str, form: EntryForm) -> list[RecordDraft]:
        work_date = require_iso_date(form.work_date)
        mode = self._mode(form)
        route_1 = optional_text(form.route_id_1)
        photos = tuple(form.photos)

        if mode == RecordMode.INDIVIDUAL:
            parcels = parse_quantity(form.parcels, "Parcelas")
            collections = parse_quantity(form.collections, "Coletas")
            if not parcels and not collections:
                raise ValidationError("Preencha ao menos parcelas ou coletas.")

            drafts = []
            for record_type, qty in ((RecordType.PARCEL, parcels), (RecordType.COLLECTION, collections)):
                if qty > 0:
                    drafts.append(
                        RecordDraft(
                            user_id=user_id,
                            work_date=work_date,
                            mode=mode,
                            record_type=record_type,
                            quantity=qty,
                            route_names=route_1,
                            is_two_ids=False,
                            photos=photos,
                        )
                    )
            return drafts

        qty = parse_quantity(form.daily_quantity, "Quantidade")
        if form.is_two_ids:
            route_2 = optional_text(form.route_id_2)
            if not route_1 or not route_2:
                raise ValidationError("Digite os IDs das duas rotas.")
            route_names = f"{route_1} + {route_2}"
        else:
            # A single-ID day is a flat rate; the item count is not tracked.
            route_names = route_1
            qty = 1

        return [
            RecordDraft(
                user_id=user_id,
                work_date=work_date,
                mode=mode,
                record_type=RecordType.DAILY_FLAT,
                quantity=qty,
                route_names=route_names,
                is_two_ids=bool(form.is_two_ids),
                photos=photos,
            )
        ]

    def save_entry(self, user_id: str, form: EntryForm) -> list[WorkRecord]:
        """Create every record of the submission and wait for all of them.

        Records that were stored stay stored when a sibling create fails; the
        first failure is re-raised.
        """
        drafts = self.build_drafts(user_id, form)
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="record-create") as pool:
            futures = [pool.submit(self._records.create_record, d) for d in drafts]
            wait(futures)

        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            logger.error(
                "%d of %d record(s) failed for user %s; the rest were kept",
                len(errors),
                len(futures),
                user_id,
            )
            raise errors[0]
        return [f.result() for f in futures]
