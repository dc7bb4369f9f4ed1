from sqlalchemy import Column, Integer, String, ForeignKey

from . import Base


class Project(Base):
    __tablename__ = "p_project"

    p_id = Column(Integer, primary_key=True, autoincrement=True)
    p_title = Column(String(255), nullable=False)
    p_color = Column(String(32), nullable=True)
    p_u_user = Column(Integer, ForeignKey("u_user.u_id"), nullable=False, index=True)
