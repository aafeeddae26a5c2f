from abc import ABC, abstractmethod
from typing import Annotated

import pytest

from servicepoint.decorators import SIGNALS_ATTR, declarations_of, signal
from servicepoint.dispatch import (
    SignalBinding,
    SignalDefinitionError,
    Subject,
    signal_method,
    validate_signal_contract,
)
from servicepoint.keys import RegistrationKey
from zoo import Animal, Loan, LoanListener, LoanNotifier, LoanState


class TwoMethods(ABC):
    @abstractmethod
    def first(self, loan: Annotated[Loan, Subject]) -> None: ...

    @abstractmethod
    def second(self, loan: Annotated[Loan, Subject]) -> None: ...


def test_signal_method_of_single_method_contract():
    assert signal_method(LoanListener).name == "loan_changed"


def test_contract_with_several_abstract_methods_is_rejected():
    with pytest.raises(SignalDefinitionError):
        signal_method(TwoMethods)


def test_target_parameters_must_match():
    def good(self, loan: Loan) -> str: ...

    def wrong_type(self, loan: Animal) -> str: ...

    def extra(self, loan: Loan, flag: bool) -> str: ...

    assert validate_signal_contract(LoanListener, good).name == "loan_changed"
    with pytest.raises(SignalDefinitionError):
        validate_signal_contract(LoanListener, wrong_type)
    with pytest.raises(SignalDefinitionError):
        validate_signal_contract(LoanListener, extra)


def test_signal_decorator_validates_at_definition():
    with pytest.raises(SignalDefinitionError):

        class Bad:
            @signal("loan-events", LoanListener, Loan)
            def on_any(self, loan: Animal) -> str: ...


def test_signal_declarations_are_attached_to_methods():
    (desc,) = declarations_of(LoanNotifier.on_approved, SIGNALS_ATTR)

    assert desc.key == RegistrationKey.of("loan-events", Loan, {"state": LoanState.APPROVED})
    assert desc.method_name == "on_approved"
    assert desc.handle.name == "zoo.LoanNotifier.on_approved->loan-events"


def test_binding_calls_the_live_service_method():
    notifier = LoanNotifier()
    listener = SignalBinding.bind(LoanListener, notifier, "on_approved").implementation()

    assert isinstance(listener, LoanListener)
    assert listener.loan_changed(Loan("L-1", LoanState.APPROVED)) == "approved L-1"
    assert notifier.seen == ["L-1"]
