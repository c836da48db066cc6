"""Wallet API Routes

FastAPI routes for the customer wallet ledger.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.actor import get_actor, get_admin_actor
from src.api.error import ClientError
from src.api.schemas.wallet_request import (
    AdjustBalanceRequestSchema,
    ConfirmAllRequestSchema,
    CreateDepositRequestSchema,
    RejectTransactionRequestSchema,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyProgressInvoiceRepository,
    SqlAlchemyPurchaseRepository,
    SqlAlchemyShopProductRepository,
    SqlAlchemyStaffMemberRepository,
    SqlAlchemyWalletTransactionRepository,
    SqlAlchemyWaybillRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.use_cases.wallet import (
    ActorDTO,
    AdjustBalanceCommandDTO,
    AdjustBalanceResponseDTO,
    AdjustWalletBalance,
    ConfirmAllCommandDTO,
    ConfirmAllForActor,
    ConfirmAllResponseDTO,
    ConfirmTransactionCommandDTO,
    ConfirmTransactionResponseDTO,
    ConfirmWalletTransaction,
    CreateDepositCommandDTO,
    CreateWalletDeposit,
    ListTransactionsQueryDTO,
    ListWalletTransactions,
    ListWalletTransactionsResponseDTO,
    PurchaseAllocationResolver,
    ReconcileWalletBalances,
    ReconciliationResultDTO,
    RejectTransactionCommandDTO,
    RejectWalletTransaction,
    WalletTransactionDTO,
)
from src.domain.wallet_transaction import WalletTransactionStatus
from src.depends import get_audit_logger, get_session

router = APIRouter(prefix="/wallet", tags=["Wallet"])

ERROR_EXAMPLE = {
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "ALREADY_PROCESSED",
                    "message": "Transaction not found or already processed"
                }
            }
        }
    }
}


def _allocation_resolver(session: AsyncSession) -> PurchaseAllocationResolver:
    return PurchaseAllocationResolver(
        purchase_repo=SqlAlchemyPurchaseRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        invoice_repo=SqlAlchemyProgressInvoiceRepository(session),
        waybill_repo=SqlAlchemyWaybillRepository(session),
        stock_repo=SqlAlchemyShopProductRepository(session),
    )


def _confirm_use_case(session: AsyncSession, audit_logger: AuditLogger) -> ConfirmWalletTransaction:
    return ConfirmWalletTransaction(
        uow=SqlAlchemyUnitOfWork(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        allocation_resolver=_allocation_resolver(session),
        audit_logger=audit_logger,
    )


@router.post(
    "/deposits",
    response_model=WalletTransactionDTO,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation error or missing permission"}},
)
async def create_deposit(
    request: CreateDepositRequestSchema,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """
    Record money received from a customer as a PENDING deposit.

    The wallet balance does not change until an admin confirms the deposit.

    **Returns:**
    - 201: Pending deposit recorded
    - 400: Invalid amount or actor cannot load wallets
    - 404: Customer not found in the actor's scope
    """
    use_case = CreateWalletDeposit(
        uow=SqlAlchemyUnitOfWork(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        staff_repo=SqlAlchemyStaffMemberRepository(session),
        audit_logger=audit_logger,
    )
    result = await use_case.execute(
        CreateDepositCommandDTO(
            customer_id=request.customer_id,
            amount=request.amount,
            payment_method=request.payment_method,
            reference=request.reference,
            description=request.description,
            actor=actor,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/transactions",
    response_model=ListWalletTransactionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_transactions(
    status_filter: Optional[WalletTransactionStatus] = Query(default=None, alias="status"),
    customer_id: Optional[str] = Query(default=None),
    created_by_id: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    List wallet transactions in the actor's scope, most recent first.

    **Query parameters:**
    - `status` (optional): pending, confirmed or rejected
    - `customer_id` (optional): Only this customer's entries
    - `created_by_id` (optional): Only entries recorded by this staff member
    - `limit` / `offset`: Pagination
    """
    use_case = ListWalletTransactions(SqlAlchemyWalletTransactionRepository(session))
    result = await use_case.execute(
        ListTransactionsQueryDTO(
            actor=actor,
            status=status_filter,
            customer_id=customer_id,
            created_by_id=created_by_id,
            limit=limit,
            offset=offset,
        )
    )
    return result.value


@router.post(
    "/transactions/confirm-all",
    response_model=ConfirmAllResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def confirm_all_for_actor(
    request: ConfirmAllRequestSchema,
    actor: ActorDTO = Depends(get_admin_actor),
    session: AsyncSession = Depends(get_session),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """
    Confirm every pending deposit recorded by the named staff member.

    Each deposit is confirmed independently; failures are listed in the
    response and do not stop the rest of the batch.
    """
    use_case = ConfirmAllForActor(
        uow=SqlAlchemyUnitOfWork(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        confirm_use_case=_confirm_use_case(session, audit_logger),
        audit_logger=audit_logger,
    )
    result = await use_case.execute(
        ConfirmAllCommandDTO(actor_name=request.actor_name, actor=actor)
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/transactions/{transaction_id}/confirm",
    response_model=ConfirmTransactionResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Transaction not found in scope"},
        409: {"description": "Transaction already processed", **ERROR_EXAMPLE},
    },
)
async def confirm_transaction(
    transaction_id: str,
    actor: ActorDTO = Depends(get_admin_actor),
    session: AsyncSession = Depends(get_session),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """
    Confirm a pending wallet transaction.

    Applies the balance change and pays down the customer's outstanding
    purchases, oldest due date first. Confirming the same transaction twice
    returns 409 and changes nothing.

    **Returns:**
    - 200: Confirmed, with final wallet balance and allocations
    - 404: Transaction not found in the actor's scope
    - 409: Transaction already confirmed or rejected
    """
    use_case = _confirm_use_case(session, audit_logger)
    result = await use_case.execute(
        ConfirmTransactionCommandDTO(transaction_id=transaction_id, actor=actor)
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/transactions/{transaction_id}/reject",
    response_model=WalletTransactionDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Transaction not found in scope"},
        409: {"description": "Transaction already processed", **ERROR_EXAMPLE},
    },
)
async def reject_transaction(
    transaction_id: str,
    request: RejectTransactionRequestSchema,
    actor: ActorDTO = Depends(get_admin_actor),
    session: AsyncSession = Depends(get_session),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """
    Reject a pending wallet transaction. The wallet balance is not touched.
    """
    use_case = RejectWalletTransaction(
        uow=SqlAlchemyUnitOfWork(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        audit_logger=audit_logger,
    )
    result = await use_case.execute(
        RejectTransactionCommandDTO(
            transaction_id=transaction_id, reason=request.reason, actor=actor
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/customers/{customer_id}/adjust",
    response_model=AdjustBalanceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid adjustment or balance would become negative"},
        404: {"description": "Customer not found in scope"},
    },
)
async def adjust_balance(
    customer_id: str,
    request: AdjustBalanceRequestSchema,
    actor: ActorDTO = Depends(get_admin_actor),
    session: AsyncSession = Depends(get_session),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """
    Directly correct a customer's wallet balance.

    Additions are applied to outstanding purchases like a confirmed deposit.
    """
    use_case = AdjustWalletBalance(
        uow=SqlAlchemyUnitOfWork(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        allocation_resolver=_allocation_resolver(session),
        audit_logger=audit_logger,
        allow_negative_balance=ApplicationConfig.ALLOW_NEGATIVE_WALLET_BALANCE,
    )
    result = await use_case.execute(
        AdjustBalanceCommandDTO(
            customer_id=customer_id,
            amount=request.amount,
            description=request.description,
            is_addition=request.is_addition,
            actor=actor,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/reconciliation",
    response_model=ReconciliationResultDTO,
    status_code=status.HTTP_200_OK,
)
async def reconcile_balances(
    actor: ActorDTO = Depends(get_admin_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Compare the stored wallet balances in the actor's shop or business with
    their confirmed ledger entries.

    Read-only: discrepancies are reported, never corrected.
    """
    use_case = ReconcileWalletBalances(
        customer_repo=SqlAlchemyCustomerRepository(session),
        transaction_repo=SqlAlchemyWalletTransactionRepository(session),
        shop_id=actor.shop_id,
        business_id=actor.business_id,
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value
