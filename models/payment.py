import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum
from .base import Base, utc_now


class PaymentStatus(str, enum.Enum):
     """Enumeration for fee payment status."""
     PENDING = "PENDING"
     COMPLETED = "COMPLETED"


class Payment(Base):
     """
     Payment model - fees owed or paid by a user (registration, tuition, exam).

     Completed payments are anchored on the ledger with a PAYMENT_RECORDED entry;
     transaction_id holds that entry's id.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     student_id = Column(String(100), nullable=True, index=True)

     # Payment details
     type = Column(String(100), nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)
     currency = Column(String(3), default="USD", nullable=False)
     status = Column(
          Enum(PaymentStatus, name="payment_status", create_constraint=True),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True
     )
     description = Column(String(255), nullable=True)
     payment_method = Column(String(50), nullable=True)
     transaction_id = Column(String(66), nullable=True)

     # Timestamps
     paid_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, default=utc_now, nullable=False)

     def __repr__(self):
          return f"<Payment(id={self.id}, type='{self.type}', amount={self.amount}, status='{self.status.value}')>"

     def mark_as_completed(self, transaction_id: str, paid_at: datetime = None) -> None:
          """Mark the payment as completed and link the ledger transaction."""
          self.status = PaymentStatus.COMPLETED
          self.paid_at = paid_at or utc_now()
          self.transaction_id = transaction_id
