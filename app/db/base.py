# File: app/db/base.py
# Project: gaupalika-complaints

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
