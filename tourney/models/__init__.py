from tourney.core.database import Base

# Import all models here to ensure they are registered with Base
from .user import User
from .tournament import Tournament
from .registration import TournamentRegistration

__all__ = ["Base", "User", "Tournament", "TournamentRegistration"]
