from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func

from . import Base


class Todo(Base):
    __tablename__ = "t_todo"

    t_id = Column(Integer, primary_key=True, autoincrement=True)
    t_title = Column(String(255), nullable=False)
    t_description = Column(String(1024), nullable=True)
    t_pr_priority = Column(Integer, ForeignKey("pr_priority.pr_id"), nullable=False)
    t_done = Column(Boolean, default=False, nullable=False)
    t_beginning = Column(DateTime, server_default=func.current_timestamp(), nullable=False)
    t_ending = Column(DateTime, nullable=True)  # deadline
    t_reminder = Column(DateTime, nullable=True)
    t_u_user = Column(Integer, ForeignKey("u_user.u_id"), nullable=False, index=True)
    t_p_project = Column(Integer, ForeignKey("p_project.p_id"), nullable=False, index=True)
