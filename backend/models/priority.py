from sqlalchemy import Column, Integer, String

from . import Base


class Priority(Base):
    __tablename__ = "pr_priority"

    pr_id = Column(Integer, primary_key=True)
    pr_name = Column(String(64), nullable=False)
