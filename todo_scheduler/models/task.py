"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String, Text
from typing import Optional


class Task(SQLModel, table=True):
    """Scheduled task: a title due on `date`, optionally repeating by `repeat`."""

    __tablename__ = "scheduler"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: str = Field(default="", sa_column=Column(String(8), nullable=False, default="", index=True))  # YYYYMMDD
    title: str = Field(default="", sa_column=Column(String(255), nullable=False, default=""))
    comment: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    repeat: str = Field(default="", sa_column=Column(String(128), nullable=False, default=""))  # e.g. "d 7", "m -1"
