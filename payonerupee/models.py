from sqlalchemy import Column, Integer

from payonerupee.database import Base

COUNTER_ROW_ID = 1


class Counter(Base):
    __tablename__ = "counter"

    id = Column(Integer, primary_key=True)                  # always COUNTER_ROW_ID
    count = Column(Integer, nullable=False, default=0)      # successful verifications
