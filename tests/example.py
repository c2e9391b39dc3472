from typing import Annotated

from scenewire import Container, DependencyProvider, Inject, Scene, inject, provide
from scenewire.logging import configure_logging


class ServiceA:
    def initialize(self, message: str) -> None:
        print(message)


class EnvironmentSystem(DependencyProvider):
    @provide
    def provide_environment_system(self) -> "EnvironmentSystem":
        return self

    @provide
    def provide_service_a(self) -> ServiceA:
        return ServiceA()

    def initialize(self) -> None:
        print("EnvironmentSystem.initialize()")


class ClassA:
    environment: Annotated[EnvironmentSystem, Inject]

    @inject
    def init(self, service_a: ServiceA) -> None:
        self.service_a = service_a

    def start(self) -> None:
        self.environment.initialize()
        self.service_a.initialize("ServiceA initialized from ClassA")


configure_logging("DEBUG")

# Build the scene and wire it once
scene = Scene()
scene.spawn(EnvironmentSystem)
class_a = scene.spawn(ClassA)
Container(scene).initialize()

class_a.start()  # EnvironmentSystem.initialize(), then ServiceA initialized from ClassA
