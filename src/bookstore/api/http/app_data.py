from dataclasses import dataclass

from src.bookstore.core.services import (
    DbSessionService,
    JwtVerificationService,
)
from src.bookstore.core.storage import ImageStore
from src.bookstore.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    jwt_verify_service: JwtVerificationService
    image_store: ImageStore

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        return cls(
            config=config,
            database_service=DbSessionService(config),
            jwt_verify_service=JwtVerificationService(config),
            image_store=ImageStore(config.storage.images_dir),
        )
