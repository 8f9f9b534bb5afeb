from sqlalchemy import Column, String

from tourney.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)  # stored lower-cased
    password = Column(String, nullable=False)  # passlib hash
    role = Column(String, nullable=True)  # "organizer" or "player", unset until chosen
