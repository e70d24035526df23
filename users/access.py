"""
Users — Access Gate

Pure role/path predicates deciding whether a role may open a section of
the application (has_access) and whether it may change data there
(can_edit). No state, no database access: every caller passes the role
explicitly, usually through a Principal built from the request user.

@file users/access.py
"""

from dataclasses import dataclass

from core.exceptions import AccessDeniedError

ROLE_ADMIN = 'admin'
ROLE_GERENTE = 'gerente'
ROLE_GERENCIA = 'gerencia'
ROLE_LOGISTICA = 'logistica'
ROLE_ASISTENTE = 'asistente_administrativo'
ROLE_ALMACENERO = 'almacenero'
ROLE_CONDUCTOR = 'conductor'

ROOT_PATH = '/'
USERS_PATH = '/configuracion/usuarios'
TRIPS_PATH = '/viajes'
PERSONNEL_PATH = '/personal'
EPP_PATH = '/personal/epp'

LOGISTICS_PREFIXES = ('/logistica', '/equipos', '/vehiculos', '/combustible', '/almacen')
ADMIN_PREFIXES = ('/vales', '/ordenes', '/proveedores', '/viajes')
SHARED_PATHS = ('/', '/reportes')


@dataclass(frozen=True)
class Principal:
    """The acting user as seen by the access gate."""

    role: str
    id: object = None

    @classmethod
    def from_user(cls, user) -> 'Principal':
        if user is None or not getattr(user, 'is_authenticated', False):
            return cls(role='')
        if user.is_superuser:
            return cls(role=ROLE_ADMIN, id=user.pk)
        return cls(role=user.role, id=user.pk)


def _is_under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + '/')


def _is_logistics(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in LOGISTICS_PREFIXES)


def _is_admin_area(path: str, *, include_trips: bool = True) -> bool:
    return any(
        path.startswith(prefix)
        for prefix in ADMIN_PREFIXES
        if include_trips or prefix != TRIPS_PATH
    )


def _is_shared(path: str) -> bool:
    return path == ROOT_PATH or any(_is_under(path, item) for item in SHARED_PATHS)


def has_access(role: str, path: str) -> bool:
    """Return True when `role` may open `path`."""
    if role == ROLE_ADMIN:
        return True
    if role in (ROLE_GERENTE, ROLE_GERENCIA):
        return not _is_under(path, USERS_PATH)
    if role == ROLE_CONDUCTOR:
        return path in (TRIPS_PATH, ROOT_PATH)
    if role in (ROLE_LOGISTICA, ROLE_ASISTENTE):
        return _is_logistics(path) or _is_admin_area(path) or _is_shared(path)
    if role == ROLE_ALMACENERO:
        return (
            _is_logistics(path)
            or _is_admin_area(path, include_trips=False)
            or _is_shared(path)
            or path.startswith(PERSONNEL_PATH)
        )
    return False


def can_edit(role: str, path: str) -> bool:
    """Return True when `role` may create, change or delete data under `path`."""
    if role == ROLE_ADMIN:
        return True
    if role in (ROLE_GERENTE, ROLE_GERENCIA):
        return False
    if not has_access(role, path):
        return False
    if role == ROLE_CONDUCTOR:
        return path == TRIPS_PATH
    if role == ROLE_ALMACENERO and path.startswith(PERSONNEL_PATH):
        return path.startswith(EPP_PATH)
    return True


def require_edit(principal: Principal | None, path: str) -> None:
    """Raise AccessDeniedError unless `principal` may edit `path`. None skips the check."""
    if principal is None:
        return
    if not can_edit(principal.role, path):
        raise AccessDeniedError()
