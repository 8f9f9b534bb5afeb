from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from tourney.core.database import Base


class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    game_mode = Column(String, nullable=False)  # "BR" or "CS"
    type = Column(String, nullable=False)  # "solo", "duo", "squad"
    format = Column(String, nullable=False)  # e.g. "BR SQUAD"
    prize_pool = Column(Integer, nullable=False)
    slot_price = Column(Integer, nullable=False)
    slots = Column(Integer, nullable=False)
    registered_players = Column(Integer, nullable=False, default=0)
    match_count = Column(Integer, nullable=False, default=1)
    kill_points = Column(Integer, nullable=False, default=1)
    position_points = Column(String, nullable=False, default="10,6,5,4,3,2,1")  # positions 1..7+
    rules = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="open", index=True)
    start_time = Column(DateTime, nullable=False)
    registration_deadline = Column(DateTime, nullable=False)
    organizer_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)

    # Clash Squad only
    cs_game_variant = Column(String, nullable=True)
    device = Column(String, nullable=True)

    is_promoted = Column(Boolean, nullable=False, default=False)
    promotion_paid = Column(Boolean, nullable=False, default=False)

    registrations = relationship("TournamentRegistration", back_populates="tournament")
