"""Purchase Allocation Resolver

Distributes wallet funds across a customer's outstanding installment
purchases, oldest due date first, and records the resulting payments,
progress invoices and waybills.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.progress_invoice_repository import ProgressInvoiceRepository
from src.app.repositories.purchase_repository import PurchaseRepository
from src.app.repositories.shop_product_repository import ShopProductRepository
from src.app.repositories.waybill_repository import WaybillRepository
from src.app.services.document_numbers import (
    generate_progress_invoice_number,
    generate_waybill_number,
)
from src.domain.customer import Customer
from src.domain.payment import Payment, PaymentStatus
from src.domain.progress_invoice import ProgressInvoice
from src.domain.purchase import DeliveryStatus, Purchase, PurchaseStatus, PurchaseType
from src.domain.wallet_transaction import PaymentMethod
from src.domain.waybill import Waybill
from .dtos import ActorDTO, AllocationDTO, AllocationResultDTO

logger = logging.getLogger(__name__)

ALLOCATABLE_STATUSES = (PurchaseStatus.ACTIVE, PurchaseStatus.PENDING)


@dataclass(frozen=True)
class PlannedAllocation:
    purchase: Purchase
    amount: Decimal


def is_allocatable(purchase: Purchase) -> bool:
    """Whether wallet funds may be applied to this purchase"""
    return (
        purchase.status in ALLOCATABLE_STATUSES
        and purchase.purchase_type != PurchaseType.CASH
        and purchase.outstanding_balance > 0
    )


def _due_date_key(purchase: Purchase) -> Tuple[bool, date]:
    # Purchases without a due date go last
    return (purchase.due_date is None, purchase.due_date or date.min)


def plan_allocations(
    purchases: Sequence[Purchase], funds: Decimal
) -> Tuple[List[PlannedAllocation], Decimal]:
    """
    Decide how funds are split across purchases

    Purchases are ordered by due date ascending; the sort is stable so equal
    due dates keep the input (creation) order. Each purchase receives
    min(remaining, outstanding) until the funds run out.

    Args:
        purchases: Candidate purchases in creation order
        funds: Positive amount to distribute

    Returns:
        (planned allocations, funds left over)
    """
    remaining = funds
    plan: List[PlannedAllocation] = []

    for purchase in sorted(purchases, key=_due_date_key):
        if remaining <= 0:
            break
        if not is_allocatable(purchase):
            continue

        applied = min(remaining, purchase.outstanding_balance)
        if applied > 0:
            plan.append(PlannedAllocation(purchase=purchase, amount=applied))
            remaining -= applied

    return plan, remaining


class PurchaseAllocationResolver:
    """
    Applies wallet funds to outstanding purchases

    Business Rules:
    1. Only ACTIVE/PENDING, non-CASH purchases with outstanding balance
    2. Oldest due date first, creation order on ties
    3. One Payment and one ProgressInvoice per purchase touched
    4. Completing a purchase decrements stock and creates its waybill once
    5. Leftover funds are returned to the caller untouched

    The resolver never commits: it writes through the caller's unit of work
    and any exception must abort the caller's whole operation.
    """

    def __init__(
        self,
        purchase_repo: PurchaseRepository,
        payment_repo: PaymentRepository,
        invoice_repo: ProgressInvoiceRepository,
        waybill_repo: WaybillRepository,
        stock_repo: ShopProductRepository,
    ):
        self.purchase_repo = purchase_repo
        self.payment_repo = payment_repo
        self.invoice_repo = invoice_repo
        self.waybill_repo = waybill_repo
        self.stock_repo = stock_repo

    async def allocate(
        self,
        customer: Customer,
        funds: Decimal,
        actor: ActorDTO,
        wallet_transaction_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AllocationResultDTO:
        """
        Distribute funds across the customer's outstanding purchases

        Args:
            customer: Customer whose purchases are paid down (row already locked)
            funds: Positive amount available
            actor: Confirming actor recorded on payments and waybills
            wallet_transaction_id: Ledger entry the funds came from
            now: Timestamp shared by every record written

        Returns:
            AllocationResultDTO with one entry per purchase touched
        """
        now = now or datetime.utcnow()

        purchases = await self.purchase_repo.get_outstanding_for_customer(
            customer.id, for_update=True
        )
        plan, remaining = plan_allocations(purchases, funds)

        allocations: List[AllocationDTO] = []
        for planned in plan:
            allocations.append(
                await self._apply(customer, planned, actor, wallet_transaction_id, now)
            )

        if allocations:
            logger.info(
                f"Applied {funds - remaining} of {funds} to {len(allocations)} purchase(s) "
                f"for customer {customer.id}"
            )

        return AllocationResultDTO(
            allocations=allocations,
            total_applied=funds - remaining,
            remaining_funds=remaining,
        )

    async def _apply(
        self,
        customer: Customer,
        planned: PlannedAllocation,
        actor: ActorDTO,
        wallet_transaction_id: Optional[str],
        now: datetime,
    ) -> AllocationDTO:
        purchase = planned.purchase
        previous_outstanding = purchase.outstanding_balance

        completed = purchase.apply_payment(planned.amount)
        await self.purchase_repo.update(purchase)

        payment = await self.payment_repo.create(
            Payment(
                purchase_id=purchase.id,
                wallet_transaction_id=wallet_transaction_id,
                amount=planned.amount,
                payment_method=PaymentMethod.WALLET,
                status=PaymentStatus.COMPLETED,
                is_confirmed=True,
                confirmed_by_id=actor.user_id,
                confirmed_at=now,
                paid_at=now,
                notes="Wallet deposit payment",
            )
        )

        waybill_number = None
        if completed:
            waybill_number = await self._complete_purchase(customer, purchase, actor)

        invoice = await self.invoice_repo.create(
            ProgressInvoice(
                invoice_number=generate_progress_invoice_number(now),
                payment_id=payment.id,
                purchase_id=purchase.id,
                customer_id=customer.id,
                shop_id=purchase.shop_id,
                payment_amount=planned.amount,
                previous_balance=previous_outstanding,
                new_balance=purchase.outstanding_balance,
                total_purchase_amount=purchase.total_amount,
                total_amount_paid=purchase.amount_paid,
                payment_method=PaymentMethod.WALLET,
                customer_name=customer.full_name,
                purchase_number=purchase.purchase_number,
                purchase_type=purchase.purchase_type.value,
                confirmed_by_name=actor.name or None,
                is_purchase_completed=completed,
                waybill_generated=waybill_number is not None,
                waybill_number=waybill_number,
                generated_at=now,
            )
        )

        return AllocationDTO(
            purchase_id=purchase.id,
            purchase_number=purchase.purchase_number,
            amount_applied=planned.amount,
            previous_outstanding=previous_outstanding,
            new_outstanding=purchase.outstanding_balance,
            purchase_completed=completed,
            payment_id=payment.id,
            progress_invoice_number=invoice.invoice_number,
            waybill_number=waybill_number,
        )

    async def _complete_purchase(
        self, customer: Customer, purchase: Purchase, actor: ActorDTO
    ) -> str:
        """
        Completion side effects: stock decrement and waybill

        Returns:
            Waybill number (existing one if the purchase already had a waybill)
        """
        items = await self.purchase_repo.get_items(purchase.id)
        for item in items:
            if item.product_id:
                await self.stock_repo.decrement_stock(
                    purchase.shop_id, item.product_id, item.quantity
                )

        existing = await self.waybill_repo.get_by_purchase_id(purchase.id)
        if existing:
            logger.info(
                f"Purchase {purchase.purchase_number} already has waybill {existing.waybill_number}"
            )
            return existing.waybill_number

        waybill = await self.waybill_repo.create(
            Waybill(
                waybill_number=generate_waybill_number(),
                purchase_id=purchase.id,
                recipient_name=customer.full_name,
                recipient_phone=customer.phone,
                delivery_address=customer.address or "N/A",
                delivery_city=customer.city,
                delivery_region=customer.region,
                special_instructions="Payment completed via wallet deposit. Ready for delivery.",
                generated_by_id=actor.user_id,
            )
        )

        purchase.delivery_status = DeliveryStatus.SCHEDULED
        await self.purchase_repo.update(purchase)

        return waybill.waybill_number
