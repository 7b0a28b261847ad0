# services/payment_service.py
"""
Payment Service - fee payments anchored on the ledger.

When a payment is made:
1. Complete the user's pending payment of the same type, or create a new one
2. Hash the canonical payment fields (user, student, type, amount, currency, paid_at)
3. Append a PAYMENT_RECORDED ledger entry and link its transaction id to the payment
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

import config
from models import LedgerAction, Payment, PaymentStatus, User, utc_now
from services.hashing_service import payment_canonical_form
from services.ledger_service import LedgerEntryDraft, LedgerStore

logger = logging.getLogger(__name__)


class PaymentService:
     """Service class for fee payments."""

     @staticmethod
     def record_payment(
          db: Session,
          user: User,
          payment_type: str,
          amount: Decimal,
          currency: Optional[str] = None,
          description: Optional[str] = None,
          payment_method: Optional[str] = None,
          ledger: Optional[LedgerStore] = None
     ) -> Payment:
          """
          Record a completed payment and anchor it on the ledger.

          Raises:
               ValueError: If a pending payment of this type exists with a different amount
          """
          ledger = ledger or LedgerStore(db)
          amount = Decimal(amount)

          payment = (
               db.query(Payment)
               .filter(
                    Payment.user_id == user.id,
                    Payment.type == payment_type,
                    Payment.status == PaymentStatus.PENDING,
               )
               .order_by(Payment.id)
               .first()
          )
          if payment is not None:
               if Decimal(payment.amount) != amount:
                    raise ValueError(
                         f"Amount mismatch: pending amount is {payment.amount}, received {amount}"
                    )
          else:
               payment = Payment(
                    user_id=user.id,
                    student_id=user.student_id,
                    type=payment_type,
                    amount=amount,
                    currency=currency or config.DEFAULT_CURRENCY,
                    description=description or payment_type,
               )
               db.add(payment)
          payment.payment_method = payment_method or "card"

          paid_at = utc_now()
          content_hash = ledger.hashing.hash_value(payment_canonical_form(
               user.id,
               payment.student_id,
               payment.type,
               payment.amount,
               payment.currency,
               paid_at,
          ))
          entry = ledger.append(LedgerEntryDraft(
               content_hash=content_hash,
               action=LedgerAction.PAYMENT_RECORDED,
               actor_address=user.wallet_address,
               record_type=payment_type,
               timestamp=paid_at,
          ))
          payment.mark_as_completed(entry.transaction_id, paid_at)
          db.flush()

          logger.info("Payment %s completed for user %s (tx=%s...)", payment.id, user.id, entry.transaction_id[:18])
          return payment

     @staticmethod
     def list_for_user(db: Session, user_id: int) -> List[Payment]:
          return db.query(Payment).filter(Payment.user_id == user_id).order_by(Payment.id).all()

     @staticmethod
     def list_pending_for_user(db: Session, user_id: int) -> List[Payment]:
          return (
               db.query(Payment)
               .filter(Payment.user_id == user_id, Payment.status == PaymentStatus.PENDING)
               .order_by(Payment.id)
               .all()
          )

     @staticmethod
     def list_all(db: Session) -> List[Payment]:
          return db.query(Payment).order_by(Payment.id).all()

     @staticmethod
     def revenue_summary(db: Session) -> dict:
          """
          Totals across all payments.

          Returns:
               Dictionary with counts and completed revenue
          """
          payments = PaymentService.list_all(db)
          completed = [p for p in payments if p.status == PaymentStatus.COMPLETED]
          pending = [p for p in payments if p.status == PaymentStatus.PENDING]

          return {
               "total": len(payments),
               "completed": len(completed),
               "pending": len(pending),
               "total_revenue": float(sum(Decimal(p.amount) for p in completed)),
          }
