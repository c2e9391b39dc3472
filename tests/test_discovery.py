from typing import TYPE_CHECKING, Annotated

from scenewire.discovery import Discovery, Scene, discover
from scenewire.lifecycle import Container, LifecycleState
from scenewire.markers import DependencyProvider, Inject, inject, provide, provider

if TYPE_CHECKING:
    from enemies import Enemy


class EnvironmentSystem:
    pass


@provider
class EnvProvider:
    @provide
    def provide_environment(self) -> EnvironmentSystem:
        return EnvironmentSystem()


class Consumer:
    environment_system: Annotated[EnvironmentSystem, Inject]


class MethodConsumer:
    @inject
    def init(self, environment_system: EnvironmentSystem) -> None:
        self.environment_system = environment_system


class SelfProvidingSystem(DependencyProvider):
    environment_system: Annotated[EnvironmentSystem, Inject]

    @provide
    def provide_self(self) -> "SelfProvidingSystem":
        return self


class _Hidden:
    _environment_system: Annotated[EnvironmentSystem, Inject]


class Scenery:
    pass


class Player:
    target: "Enemy"
    speed: float = 1.0


def test_scene_keeps_insertion_order_and_identity():
    first, second = Scenery(), Scenery()
    scene = Scene([first, second])
    scene.add(first)

    assert scene.instances() == (first, second)
    assert len(scene) == 2
    assert first in scene
    assert Scenery() not in scene


def test_scene_add_and_spawn_return_component():
    scene = Scene()
    added = scene.add(Scenery())
    spawned = scene.spawn(EnvProvider)

    assert isinstance(spawned, EnvProvider)
    assert scene.instances() == (added, spawned)


def test_discover_partitions_providers_and_injectables():
    env_provider = EnvProvider()
    consumer = Consumer()
    method_consumer = MethodConsumer()
    scenery = Scenery()

    result = discover([scenery, consumer, env_provider, method_consumer])

    assert result == Discovery((env_provider,), (consumer, method_consumer))


def test_component_can_be_provider_and_injectable():
    system = SelfProvidingSystem()

    result = discover([system])

    assert result.providers == (system,)
    assert result.injectables == (system,)


def test_private_only_injectables_skipped_when_private_excluded():
    hidden = _Hidden()

    assert discover([hidden]).injectables == (hidden,)
    assert discover([hidden], include_private=False).injectables == ()


def test_discover_is_a_pure_read():
    consumer = Consumer()
    discover([consumer])

    assert not hasattr(consumer, "environment_system")


def test_untagged_forward_reference_is_not_evaluated():
    player = Player()

    result = discover([player, Consumer()])

    assert player not in result.injectables


def test_scene_with_untagged_forward_reference_reaches_ready():
    consumer = Consumer()
    container = Container(Scene([EnvProvider(), consumer, Player()]))

    assert container.initialize() is LifecycleState.READY
    assert consumer.environment_system is container.resolve(EnvironmentSystem)
