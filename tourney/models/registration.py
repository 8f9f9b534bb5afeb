from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base


class TournamentRegistration(Base):
    __tablename__ = "tournament_registrations"

    id = Column(String, primary_key=True, index=True)
    tournament_id = Column(String, ForeignKey("tournaments.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    team_name = Column(String, nullable=True)
    igl_real_name = Column(String, nullable=False)
    igl_ingame_id = Column(String, nullable=False)
    player_names = Column(JSON, nullable=True)
    registration_fee = Column(Integer, nullable=False)  # slot price at the time of registration
    payment_status = Column(String, nullable=False, default="pending")
    payment_method = Column(String, nullable=True)
    registered_at = Column(DateTime, nullable=False)

    tournament = relationship("Tournament", back_populates="registrations")
