from credential_export.models.credential import (
    Workspace, Public, Private, Realm, Core, Host, Service, Login
)

__all__ = [
    "Workspace",
    "Public",
    "Private",
    "Realm",
    "Core",
    "Host",
    "Service",
    "Login",
]
