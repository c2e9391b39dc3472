from typing import Annotated

import pytest

from scenewire.config import WiringConfig
from scenewire.errors import MissingDependencyError
from scenewire.injection import Injector
from scenewire.markers import Inject, inject
from scenewire.registry import TypeRegistry


class EnvironmentSystem:
    pass


class AudioSystem:
    pass


class ServiceX:
    pass


class Consumer:
    environment_system: Annotated[EnvironmentSystem, Inject]


class ClassA:
    @inject
    def init(self, audio: AudioSystem, *, environment: EnvironmentSystem) -> None:
        self.audio = audio
        self.environment = environment


class OrderedConsumer:
    environment_system: Annotated[EnvironmentSystem, Inject]

    def __init__(self):
        self.seen_in_method = None

    @inject
    def init(self, audio: AudioSystem) -> None:
        self.seen_in_method = self.environment_system
        self.audio = audio


class PartlyWired:
    environment_system: Annotated[EnvironmentSystem, Inject]
    service: Annotated[ServiceX, Inject]

    def __init__(self):
        self.init_called = False

    @inject
    def init(self, audio: AudioSystem) -> None:
        self.init_called = True


class MethodOrphan:
    def __init__(self):
        self.init_called = False

    @inject
    def init(self, audio: AudioSystem, service: ServiceX) -> None:
        self.init_called = True


class NothingTagged:
    pass


@pytest.fixture
def environment():
    return EnvironmentSystem()


@pytest.fixture
def audio():
    return AudioSystem()


@pytest.fixture
def registry(environment, audio):
    registry = TypeRegistry()
    registry.register(EnvironmentSystem, environment)
    registry.register(AudioSystem, audio)
    registry.freeze()
    return registry


@pytest.fixture
def injector(registry):
    return Injector(registry)


def test_field_receives_registered_instance(injector, environment):
    consumer = Consumer()

    injector.inject(consumer)

    assert consumer.environment_system is environment


def test_method_called_with_resolved_arguments(injector, environment, audio):
    class_a = ClassA()

    injector.inject(class_a)

    assert class_a.audio is audio
    assert class_a.environment is environment


def test_fields_are_injected_before_methods(injector, environment):
    consumer = OrderedConsumer()

    injector.inject(consumer)

    assert consumer.seen_in_method is environment


def test_missing_field_dependency_raises(injector):
    with pytest.raises(
        MissingDependencyError,
        match="Missing dependency ServiceX for PartlyWired.service",
    ) as exc_info:
        injector.inject(PartlyWired())

    assert exc_info.value.owner_type is PartlyWired
    assert exc_info.value.member_name == "service"
    assert exc_info.value.required_type is ServiceX


def test_atomic_injection_leaves_instance_untouched(injector):
    wired = PartlyWired()

    with pytest.raises(MissingDependencyError):
        injector.inject(wired)

    assert not hasattr(wired, "environment_system")
    assert not wired.init_called


def test_best_effort_injection_keeps_earlier_fields(registry, environment):
    injector = Injector(registry, WiringConfig(atomic_injection=False))
    wired = PartlyWired()

    with pytest.raises(MissingDependencyError):
        injector.inject(wired)

    assert wired.environment_system is environment
    assert not wired.init_called


@pytest.mark.parametrize("atomic", [True, False])
def test_method_with_missing_argument_is_not_called(registry, atomic):
    injector = Injector(registry, WiringConfig(atomic_injection=atomic))
    orphan = MethodOrphan()

    with pytest.raises(MissingDependencyError, match="ServiceX for MethodOrphan.init") as exc_info:
        injector.inject(orphan)

    assert exc_info.value.member_name == "init"
    assert not orphan.init_called


def test_untagged_instance_is_left_alone(injector):
    untouched = NothingTagged()

    injector.inject(untouched)

    assert vars(untouched) == {}


def test_injected_fields_share_the_registered_instance(injector):
    first, second = Consumer(), Consumer()

    injector.inject(first)
    injector.inject(second)

    assert first.environment_system is second.environment_system
