from sqlalchemy import Column, Integer, String

from . import Base


class User(Base):
    __tablename__ = "u_user"

    u_id = Column(Integer, primary_key=True, autoincrement=True)
    u_username = Column(String(255), unique=True, nullable=False, index=True)
    u_password = Column(String(255), nullable=False)  # bcrypt hash
