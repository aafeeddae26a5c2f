# servicepoint/decorators/signal.py
"""Signal target declarations on service methods."""

from __future__ import annotations

import inspect
from typing import Any

from servicepoint.dispatch.contracts import service_point_name
from servicepoint.dispatch.signals import validate_signal_contract
from servicepoint.keys import TaggedValuesLike, coerce_tagged_values
from servicepoint.utils.types import qualified_name

from .base import BaseDecorator
from .records import SIGNALS_ATTR, SignalDesc

__all__ = ["SignalDecorator", "signal"]


class SignalDecorator(BaseDecorator):
    """
    Declares a method as the target of a signal point.

        class LoanNotifier:
            @signal("loan-events", LoanListener, Loan, {"state": "APPROVED"})
            def on_approved(self, loan: Loan) -> None: ...

    The method's parameters must match the contract's single abstract method;
    a mismatch raises ``SignalDefinitionError`` right here.
    """

    attr = SIGNALS_ATTR
    log_category = "signal"

    def __init__(
        self,
        signal_point: str | None,
        contract: type,
        subject_type: type,
        tagged_values: TaggedValuesLike = None,
    ) -> None:
        if not isinstance(subject_type, type):
            raise TypeError(f"subject_type must be a class (got {subject_type!r})")
        self.signal_point = (signal_point or service_point_name(contract)).strip()
        self.contract = contract
        self.subject_type = subject_type
        self.tagged_values = coerce_tagged_values(tagged_values)

    def validate_target(self, target: Any) -> None:
        if not inspect.isfunction(target):
            raise TypeError(f"@signal decorates methods defined with def (got {target!r})")
        validate_signal_contract(self.contract, target)

    def describe(self, target: Any) -> SignalDesc:
        return SignalDesc(
            signal_point=self.signal_point,
            contract=self.contract,
            subject_type=self.subject_type,
            method_name=target.__name__,
            service_name=qualified_name(target),
            tagged_values=self.tagged_values,
        )


signal = SignalDecorator
