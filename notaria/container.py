"""
===============================================================================
TARJETA CRC — notaria/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, TokenService y casos de uso a partir de Settings.
  - Elegir el store: in-memory en APP_ENV=test, PostgreSQL (pool inyectado)
    en el resto.
  - Exponer un único objeto Container que la app guarda en app.state.

Colaboradores:
  - notaria.crosscutting.config.Settings
  - notaria.infrastructure.repositories.* (implementaciones)
  - notaria.application.usecases.* (casos de uso)
  - notaria.identity.auth_users.TokenService

Notas:
  - Sin lógica de negocio y sin FastAPI.
  - El pool no se abre acá: lo abre/cierra el lifespan de la app.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import ConnectionPool

from .application.usecases.processes import (
    ChangeProcessStateUseCase,
    CreateProcessUseCase,
    DeleteProcessUseCase,
    GetProcessUseCase,
    ListProcessesUseCase,
)
from .application.usecases.users import (
    AuthenticateUserUseCase,
    ChangePasswordUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUserProcessesUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import Settings
from .domain.repositories import ProcessRepository, UserRepository
from .identity.auth_users import TokenService
from .infrastructure.repositories import (
    InMemoryProcessRepository,
    InMemoryUserRepository,
    PostgresProcessRepository,
    PostgresUserRepository,
)


@dataclass
class Container:
    """Dependencias ya compuestas de la aplicación."""

    settings: Settings
    users: UserRepository
    processes: ProcessRepository
    token_service: TokenService

    # Procesos
    create_process: CreateProcessUseCase
    get_process: GetProcessUseCase
    list_processes: ListProcessesUseCase
    change_process_state: ChangeProcessStateUseCase
    delete_process: DeleteProcessUseCase

    # Usuarios
    register_user: RegisterUserUseCase
    authenticate_user: AuthenticateUserUseCase
    get_user: GetUserUseCase
    list_users: ListUsersUseCase
    update_user: UpdateUserUseCase
    change_password: ChangePasswordUseCase
    delete_user: DeleteUserUseCase
    list_user_processes: ListUserProcessesUseCase

    def is_ready(self) -> bool:
        """Readiness: el store responde."""
        return bool(self.processes.ping())


def build_repositories(
    settings: Settings, pool: ConnectionPool | None = None
) -> tuple[UserRepository, ProcessRepository]:
    if settings.is_test_env() and pool is None:
        processes = InMemoryProcessRepository()
        return InMemoryUserRepository(processes), processes

    if pool is None:
        raise ValueError("Se requiere un pool de conexiones fuera de APP_ENV=test")
    return PostgresUserRepository(pool), PostgresProcessRepository(pool)


def build_container(
    settings: Settings,
    pool: ConnectionPool | None = None,
    *,
    users: UserRepository | None = None,
    processes: ProcessRepository | None = None,
    token_service: TokenService | None = None,
) -> Container:
    """
    Arma el Container.

    Los repositorios y el TokenService pueden inyectarse (tests); si no, se
    construyen según Settings.
    """
    if users is None or processes is None:
        default_users, default_processes = build_repositories(settings, pool)
        users = users or default_users
        processes = processes or default_processes

    tokens = token_service or TokenService(
        settings.jwt_secret, settings.jwt_access_ttl_seconds
    )
    min_password = settings.min_password_chars

    return Container(
        settings=settings,
        users=users,
        processes=processes,
        token_service=tokens,
        create_process=CreateProcessUseCase(processes),
        get_process=GetProcessUseCase(processes),
        list_processes=ListProcessesUseCase(processes),
        change_process_state=ChangeProcessStateUseCase(processes),
        delete_process=DeleteProcessUseCase(processes),
        register_user=RegisterUserUseCase(
            users, tokens, min_password_chars=min_password
        ),
        authenticate_user=AuthenticateUserUseCase(users, tokens),
        get_user=GetUserUseCase(users),
        list_users=ListUsersUseCase(users),
        update_user=UpdateUserUseCase(users, min_password_chars=min_password),
        change_password=ChangePasswordUseCase(
            users, min_password_chars=min_password
        ),
        delete_user=DeleteUserUseCase(users, processes),
        list_user_processes=ListUserProcessesUseCase(processes),
    )
