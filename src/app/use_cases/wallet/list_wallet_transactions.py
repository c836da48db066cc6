"""
List Wallet Transactions Use Case

Retrieves the wallet ledger inside the caller's scope with pagination.
"""
from src.libs.result import Result, Return
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from .dtos import ListTransactionsQueryDTO, ListWalletTransactionsResponseDTO, WalletTransactionDTO


class ListWalletTransactions:
    """
    Use case: View wallet transactions

    Transactions are ordered by created_at DESC (most recent first).
    """

    def __init__(self, transaction_repo: WalletTransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(
        self, query: ListTransactionsQueryDTO
    ) -> Result[ListWalletTransactionsResponseDTO]:
        filters = dict(
            shop_id=query.actor.shop_id,
            business_id=query.actor.business_id,
            customer_id=query.customer_id,
            status=query.status,
            created_by_id=query.created_by_id,
        )

        transactions = await self.transaction_repo.list_transactions(
            limit=query.limit, offset=query.offset, **filters
        )
        total = await self.transaction_repo.count_transactions(**filters)

        return Return.ok(
            ListWalletTransactionsResponseDTO(
                transactions=[WalletTransactionDTO.from_entity(t) for t in transactions],
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )
