"""
Factories para la creación de esquemas de prueba.
"""
from datetime import date, timedelta

import factory
from faker import Faker

from vacation_portal.schemas.session import Session
from vacation_portal.schemas.user import Role, User
from vacation_portal.schemas.vacation_request import VacationRequest, VacationStatus

# Inicializar faker con locale español
faker = Faker('es_ES')


class UserFactory(factory.Factory):
    """Factory para usuarios tal y como los devuelve el backend."""

    class Meta:
        model = User

    id = factory.Sequence(lambda n: n + 1)
    email = factory.LazyFunction(lambda: faker.email())
    name = factory.LazyFunction(lambda: faker.name())
    role = Role.COLLABORATOR
    manager_id = None

    @classmethod
    def build_admin(cls, **kwargs) -> User:
        """Crea un usuario con rol de admin."""
        return cls.build(role=Role.ADMIN, **kwargs)

    @classmethod
    def build_manager(cls, **kwargs) -> User:
        """Crea un usuario con rol de manager."""
        return cls.build(role=Role.MANAGER, **kwargs)


class VacationRequestFactory(factory.Factory):
    """Factory para solicitudes de vacaciones de prueba."""

    class Meta:
        model = VacationRequest

    id = factory.Sequence(lambda n: n + 1)
    user_id = factory.Sequence(lambda n: n + 100)
    user_name = factory.LazyFunction(lambda: faker.name())
    start_date = factory.LazyFunction(lambda: date.today() + timedelta(days=10))
    end_date = factory.LazyAttribute(lambda o: o.start_date + timedelta(days=5))
    status = VacationStatus.PENDING

    @classmethod
    def build_approved(cls, **kwargs) -> VacationRequest:
        """Crea una solicitud de vacaciones aprobada."""
        return cls.build(status=VacationStatus.APPROVED, **kwargs)


class SessionFactory(factory.Factory):
    """Factory para sesiones autenticadas."""

    class Meta:
        model = Session

    token = factory.LazyFunction(lambda: faker.sha1())
    user_id = factory.Sequence(lambda n: n + 1)
    email = factory.LazyFunction(lambda: faker.email())
    name = factory.LazyFunction(lambda: faker.name())
    role = Role.COLLABORATOR
