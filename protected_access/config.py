"""
Configuration settings for the protected resource access catalogue.
"""
import sys
from typing import Dict, Any
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # File fixtures (relative to the working directory)
    resources_dir: str = "resources"
    executables_dir: str = "paths"

    # Loopback fixtures
    loopback_host: str = "127.0.0.1"
    loopback_timeout_seconds: float = 5.0

    # Processes and threads
    command_timeout_seconds: float = 10.0
    thread_join_timeout_seconds: float = 5.0

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: str = '["http://localhost:3000", "http://localhost:8080"]'

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()

APP_VERSION = "0.0.1"

WINDOWS = sys.platform.startswith("win")

# Access categories exposed by the catalogue
ACCESS_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "file-create": {
        "class_path": "protected_access.services.file_create.FileSystemCreateAccess",
        "description": "Create a file through different file APIs",
        "resource_kind": "file",
    },
    "file-read": {
        "class_path": "protected_access.services.file_read.FileSystemReadAccess",
        "description": "Read a file through different file APIs",
        "resource_kind": "file",
    },
    "file-write": {
        "class_path": "protected_access.services.file_write.FileSystemWriteAccess",
        "description": "Overwrite a file through different file APIs",
        "resource_kind": "file",
    },
    "file-delete": {
        "class_path": "protected_access.services.file_delete.FileSystemDeleteAccess",
        "description": "Delete a file through different file APIs",
        "resource_kind": "file",
    },
    "file-execute": {
        "class_path": "protected_access.services.file_execute.FileSystemExecuteAccess",
        "description": "Execute a script file through different process APIs",
        "resource_kind": "file",
    },
    "command-execute": {
        "class_path": "protected_access.services.command_execution.CommandSystemExecutionAccess",
        "description": "Run a shell command through different process APIs",
        "resource_kind": "command",
    },
    "network-connect": {
        "class_path": "protected_access.services.network_connect.NetworkSystemConnectAccess",
        "description": "Open a TCP connection through different socket APIs",
        "resource_kind": "network",
    },
    "network-send": {
        "class_path": "protected_access.services.network_send.NetworkSystemSendAccess",
        "description": "Send data over TCP and UDP through different socket APIs",
        "resource_kind": "network",
    },
    "network-receive": {
        "class_path": "protected_access.services.network_receive.NetworkSystemReceiveAccess",
        "description": "Receive data over TCP and UDP through different socket APIs",
        "resource_kind": "network",
    },
    "thread-create": {
        "class_path": "protected_access.services.thread_create.ThreadSystemCreateAccess",
        "description": "Start a thread through different concurrency APIs",
        "resource_kind": "thread",
    },
}

# Seed content written by AccessService.prepare_resources
SEED_CONTENT = {
    "file-read": "read-access-payload",
    "file-write": "initial-write-content",
    "file-delete": "seed data",
}

EXECUTABLE_SCRIPT = (
    "@echo off\r\necho Hello FileSystemExecuteAccess\r\n"
    if WINDOWS
    else "#!/bin/sh\necho Hello FileSystemExecuteAccess\n"
)
