
from typing import List
from fastapi import APIRouter, Depends, Request, status

from banking_api.schemas import (
    AccountCreate,
    AccountResponse,
    DepositRequest,
    MessageResponse,
    TransactionResponse,
    TransferRequest,
    WithdrawRequest
)
from banking_api.services.ledger import Ledger

router = APIRouter()

def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger

@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(account: AccountCreate, ledger: Ledger = Depends(get_ledger)):
    new_account = ledger.create_account(account.name, account.initial_balance)
    return AccountResponse.model_validate(new_account)

@router.post("/accounts/deposit", response_model=MessageResponse)
def deposit(body: DepositRequest, ledger: Ledger = Depends(get_ledger)):
    ledger.deposit(body.account_id, body.amount)
    return MessageResponse(message="Deposit successful")

@router.post("/accounts/withdraw", response_model=MessageResponse)
def withdraw(body: WithdrawRequest, ledger: Ledger = Depends(get_ledger)):
    ledger.withdraw(body.account_id, body.amount)
    return MessageResponse(message="Withdraw successful")

@router.post("/accounts/transfer", response_model=MessageResponse)
def transfer(body: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    ledger.transfer(body.from_account_id, body.to_account_id, body.amount)
    return MessageResponse(message="Transfer successful")

@router.get("/accounts/{account_id}", response_model=AccountResponse)
def get_account(account_id: str, ledger: Ledger = Depends(get_ledger)):
    return AccountResponse.model_validate(ledger.get_account(account_id))

@router.get("/accounts/{account_id}/transactions", response_model=List[TransactionResponse])
def list_transactions(account_id: str, ledger: Ledger = Depends(get_ledger)):
    entries = ledger.list_transactions(account_id)
    return [TransactionResponse.model_validate(entry) for entry in entries]
