"""Subjects, contracts and declared services shared by the tests.

Also imported by name as a discovery module.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from servicepoint import Subject, Tag, domain_service, service_point, signal


class PokemonType(Enum):
    PIKACHU = "pikachu"
    CHARIZARD = "charizard"


class PokemonState(Enum):
    WILD = 1
    TRAINED = 2


@dataclass
class Animal:
    name: str


class Dog(Animal):
    pass


class Cat(Animal):
    pass


class Fish(Animal):
    pass


@dataclass
class Pokemon(Animal):
    type: Annotated[PokemonType, Tag("type", priority=1)] = PokemonType.PIKACHU
    state: Annotated[PokemonState, Tag("state", priority=0)] = PokemonState.WILD


class Rock:
    pass


class AnimalError(Exception):
    pass


@service_point("animals")
class AnimalService(ABC):
    @abstractmethod
    def make_sound(self, animal: Annotated[Animal, Subject]) -> str: ...

    def describe(self, animal: Animal) -> str:
        return f"animal {animal.name}"


@domain_service(AnimalService, Animal)
class GenericAnimalService(AnimalService):
    def make_sound(self, animal):
        if isinstance(animal, Fish):
            raise AnimalError("fish doesn't make sound")
        return "generic"


@domain_service(AnimalService, Cat)
class CatService(AnimalService):
    def make_sound(self, animal):
        return "cat"


pikachu_service = domain_service.preset(AnimalService, Pokemon, {"type": PokemonType.PIKACHU})


@pikachu_service()
class PikachuService(AnimalService):
    def make_sound(self, animal):
        return "pikachu"


@pikachu_service({"state": PokemonState.TRAINED})
class TrainedPikachuService(AnimalService):
    def make_sound(self, animal):
        return "trained-pikachu"


class _DogService(AnimalService):
    def make_sound(self, animal):
        return f"woof from {animal.name}"


@domain_service(AnimalService, Dog, name="zoo.dog")
def dog_service() -> AnimalService:
    return _DogService()


class LoanState(Enum):
    REQUESTED = "requested"
    APPROVED = "approved"


@dataclass
class Loan:
    number: str
    state: Annotated[LoanState, Tag("state")] = LoanState.REQUESTED


@service_point("loan-events")
class LoanListener(ABC):
    @abstractmethod
    def loan_changed(self, loan: Annotated[Loan, Subject]) -> str: ...


class LoanNotifier:
    def __init__(self) -> None:
        self.seen: list[str] = []

    @signal("loan-events", LoanListener, Loan, {"state": LoanState.APPROVED})
    def on_approved(self, loan: Loan) -> str:
        self.seen.append(loan.number)
        return f"approved {loan.number}"

    @signal("loan-events", LoanListener, Loan, {"state": LoanState.REQUESTED})
    def on_requested(self, loan: Loan) -> str:
        self.seen.append(loan.number)
        return f"requested {loan.number}"


@service_point("loans")
class LoanService(ABC):
    @abstractmethod
    def process(self, loan: Annotated[Loan, Subject]) -> str: ...


class LoanServices:
    """Factory methods, each serving one loan state."""

    def __init__(self) -> None:
        self.built = 0

    @domain_service(LoanService, Loan, {"state": LoanState.REQUESTED})
    def requested(self) -> LoanService:
        self.built += 1
        return _StateLoanService("check")

    @domain_service(LoanService, Loan, {"state": LoanState.APPROVED})
    def approved(self) -> LoanService:
        self.built += 1
        return _StateLoanService("pay out")


class _StateLoanService(LoanService):
    def __init__(self, action: str) -> None:
        self.action = action

    def process(self, loan):
        return f"{self.action} {loan.number}"
