"""
Credential store models.

A Core ties together the three credential components (public, private,
realm) inside a workspace. A Login records that a Core applies to a
network Service running on a Host.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from credential_export.core.database import Base


class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    cores = relationship("Core", back_populates="workspace", cascade="all, delete-orphan")
    hosts = relationship("Host", back_populates="workspace", cascade="all, delete-orphan")


class Public(Base):
    __tablename__ = "credential_publics"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False)


class Private(Base):
    __tablename__ = "credential_privates"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False, index=True)  # Password, NTLMHash, SSHKey, ...
    data = Column(Text, nullable=False)


class Realm(Base):
    __tablename__ = "credential_realms"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False)  # e.g., "Active Directory Domain"
    value = Column(String, nullable=False)


class Core(Base):
    __tablename__ = "credential_cores"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    public_id = Column(Integer, ForeignKey("credential_publics.id"), nullable=True)
    private_id = Column(Integer, ForeignKey("credential_privates.id"), nullable=True)
    realm_id = Column(Integer, ForeignKey("credential_realms.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="cores")
    public = relationship("Public")
    private = relationship("Private")
    realm = relationship("Realm")
    logins = relationship("Login", back_populates="core", cascade="all, delete-orphan")


class Host(Base):
    __tablename__ = "hosts"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    address = Column(String, nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="hosts")
    services = relationship("Service", back_populates="host", cascade="all, delete-orphan")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    host_id = Column(Integer, ForeignKey("hosts.id"), nullable=False)
    port = Column(Integer, nullable=False)
    proto = Column(String, nullable=False, default="tcp")
    name = Column(String, nullable=True)  # e.g., "ssh", "smb"

    # Relationships
    host = relationship("Host", back_populates="services")
    logins = relationship("Login", back_populates="service")


class Login(Base):
    __tablename__ = "credential_logins"

    id = Column(Integer, primary_key=True, index=True)
    core_id = Column(Integer, ForeignKey("credential_cores.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)
    status = Column(String, nullable=False, default="Untried")  # Successful, Denied Access, ...
    last_attempted_at = Column(DateTime, nullable=True)

    # Relationships
    core = relationship("Core", back_populates="logins")
    service = relationship("Service", back_populates="logins")
