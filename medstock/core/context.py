"""
Application context: the one handle every component receives.

Built once at startup and passed explicitly; components never reach for a
module-level engine or session.
"""

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from medstock.config.settings import Settings

from .clock import Clock


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    clock: Clock

    def dispose(self) -> None:
        """Release pooled connections"""
        self.engine.dispose()
