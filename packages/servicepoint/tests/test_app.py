import logging

import pytest

import zoo
from servicepoint import (
    DiscoveryError,
    RegistrationCollisionError,
    ServiceNotFoundError,
    ServicePointApp,
    ServicePointSettings,
    discover,
)
from servicepoint.decorators import DOMAIN_SERVICES_ATTR, declarations_of, domain_service
from servicepoint.keys import ImplementationHandle, RegistrationKey
from zoo import (
    Animal,
    AnimalService,
    Cat,
    CatService,
    Dog,
    GenericAnimalService,
    Loan,
    LoanListener,
    LoanNotifier,
    LoanService,
    LoanServices,
    LoanState,
    PikachuService,
    Pokemon,
    PokemonState,
    PokemonType,
    TrainedPikachuService,
)

ANIMAL_SERVICES = (GenericAnimalService, CatService, PikachuService, TrainedPikachuService)


@pytest.fixture
def app():
    with ServicePointApp(name="test") as app:
        yield app


def test_domain_service_declarations():
    (desc,) = declarations_of(TrainedPikachuService, DOMAIN_SERVICES_ATTR)

    assert desc.service_name == "zoo.TrainedPikachuService"
    assert desc.key == RegistrationKey.of(
        "animals", Pokemon, {"type": PokemonType.PIKACHU, "state": PokemonState.TRAINED}
    )
    assert desc.handle == ImplementationHandle("zoo.TrainedPikachuService")
    # declarations are not inherited
    assert declarations_of(type("Sub", (CatService,), {}), DOMAIN_SERVICES_ATTR) == ()


def test_declarations_stack():
    @domain_service("animals", Cat)
    @domain_service("animals", Dog)
    class CatsAndDogs(AnimalService):
        def make_sound(self, animal):
            return "either"

    descs = declarations_of(CatsAndDogs, DOMAIN_SERVICES_ATTR)
    assert [d.subject_type for d in descs] == [Dog, Cat]


def test_animal_scenario_through_the_app(app):
    for service in ANIMAL_SERVICES:
        app.activate(service)
    animals = app.service_point(AnimalService)

    assert animals.make_sound(Pokemon("p", PokemonType.PIKACHU, PokemonState.WILD)) == "pikachu"
    assert animals.make_sound(Pokemon("p", PokemonType.PIKACHU, PokemonState.TRAINED)) == "trained-pikachu"
    assert animals.make_sound(Cat("Tigger")) == "cat"
    assert animals.make_sound(Dog("Buddy")) == "generic"
    with pytest.raises(zoo.AnimalError):
        animals.make_sound(zoo.Fish("Nemo"))


def test_service_point_proxy_is_cached_per_name(app):
    assert app.service_point(AnimalService) is app.service_point(AnimalService)
    assert app.service_point(AnimalService, "other") is not app.service_point(AnimalService)


def test_class_components_are_singletons(app):
    app.activate(CatService)
    app.activate(GenericAnimalService)

    first = app.components.get("zoo.CatService")
    app.service_point(AnimalService).make_sound(Cat("Tigger"))
    assert app.components.get("zoo.CatService") is first


def test_factory_function_activation(app):
    app.activate(zoo.dog_service)
    animals = app.service_point(AnimalService)

    assert animals.make_sound(Dog("Buddy")) == "woof from Buddy"
    assert app.resolve("animals", Dog("Buddy")) == ImplementationHandle("zoo.dog")
    assert app.store.get(RegistrationKey.of("animals", Dog)).meta == {"app": "test"}


def test_factory_methods_share_their_owner(app):
    records = app.activate(LoanServices)
    loans = app.service_point(LoanService)

    assert len(records) == 2
    assert loans.process(Loan("L-1", LoanState.REQUESTED)) == "check L-1"
    assert loans.process(Loan("L-2", LoanState.APPROVED)) == "pay out L-2"
    assert app.components.get("zoo.LoanServices").built == 2


def test_instance_activation_uses_the_instance(app):
    notifier = LoanNotifier()
    app.activate(notifier)
    events = app.service_point(LoanListener)

    assert events.loan_changed(Loan("L-1", LoanState.APPROVED)) == "approved L-1"
    assert events.loan_changed(Loan("L-2")) == "requested L-2"
    assert notifier.seen == ["L-1", "L-2"]


def test_deactivate_removes_registrations(app):
    app.activate(GenericAnimalService)
    app.activate(CatService)
    animals = app.service_point(AnimalService)
    assert animals.make_sound(Cat("Tigger")) == "cat"

    assert app.deactivate(CatService) == 1
    assert animals.make_sound(Cat("Tigger")) == "generic"
    assert "zoo.CatService" not in app.components

    assert app.deactivate(GenericAnimalService) == 1
    with pytest.raises(ServiceNotFoundError):
        animals.make_sound(Cat("Tigger"))


def test_deactivate_keeps_a_registration_taken_over_by_another(app):
    @domain_service("animals", Cat, name="zoo.other-cat")
    class OtherCat(AnimalService):
        def make_sound(self, animal):
            return "other"

    app.activate(CatService)
    app.activate(OtherCat)

    assert app.deactivate(CatService) == 0
    assert app.service_point(AnimalService).make_sound(Cat("Tigger")) == "other"


def test_override_can_be_disabled():
    @domain_service("animals", Cat, name="zoo.other-cat")
    class OtherCat(AnimalService):
        def make_sound(self, animal):
            return "other"

    with ServicePointApp(settings={"ALLOW_OVERRIDE": False}) as app:
        app.activate(CatService)
        with pytest.raises(RegistrationCollisionError):
            app.activate(OtherCat)


def test_configure_applies_to_live_components(app):
    app.configure({"ALLOW_OVERRIDE": False, "TRACE_ROUTING": False, "STRICT_ACCESSORS": True})

    assert app.store.allow_override is False
    assert app.router.trace is False
    assert app.cache.strict is True


def test_settings_model_is_accepted():
    with ServicePointApp(settings=ServicePointSettings(TRACE_ROUTING=False)) as app:
        assert app.router.trace is False
        assert app.options.TRACE_ROUTING is False


def test_explain(app):
    app.activate(GenericAnimalService)
    result = app.explain(AnimalService, Dog("Buddy"))

    assert result.value == ImplementationHandle("zoo.GenericAnimalService")
    assert [b.name for b in result.branches] == ["Dog@-", "Animal@-"]


def test_activate_undeclared_target_is_a_no_op(app):
    class Plain:
        pass

    assert app.activate(Plain) == []
    assert app.store.count() == 0


def test_discover_returns_declared_members():
    members = discover(["zoo"])

    assert members == [
        GenericAnimalService,
        CatService,
        PikachuService,
        TrainedPikachuService,
        zoo.dog_service,
        LoanNotifier,
        LoanServices,
    ]


def test_discover_missing_module_raises():
    with pytest.raises(DiscoveryError):
        discover(["servicepoint_no_such_module"])


def test_autodiscover_uses_settings(caplog):
    with ServicePointApp(settings={"DISCOVERY_MODULES": "zoo"}) as app:
        with caplog.at_level(logging.INFO, logger="servicepoint.app"):
            members = app.autodiscover()

        assert len(members) == 7
        assert "activated" in caplog.text
        animals = app.service_point(AnimalService)
        assert animals.make_sound(Dog("Buddy")) == "woof from Buddy"
        assert animals.make_sound(Cat("Tigger")) == "cat"
        assert app.service_point(LoanService).process(Loan("L-1")) == "check L-1"


def test_shutdown_clears_everything():
    app = ServicePointApp()
    app.activate(CatService)
    app.service_point(AnimalService).make_sound(Cat("Tigger"))

    app.shutdown()

    assert app.store.count() == 0
    assert app.components.names() == ()
    assert len(app.cache) == 0
    assert app.resolve(AnimalService, Animal("x")) is None
