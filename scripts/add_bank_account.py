#!/usr/bin/env python3
"""
Register a platform bank account that businesses can pay subscriptions into.

Usage:
    python scripts/add_bank_account.py --bank "Commercial Bank of Ethiopia" \
        --number 1000123456789 --name "CafePOS PLC" [--branch Bole]
    python scripts/add_bank_account.py --deactivate 1000123456789
"""
import argparse
import logging
import sys

from app.core.logger import init_logging
from app.db.session import session_scope
from app.models.billing_models import BankAccount

logger = logging.getLogger("scripts.add_bank_account")


def add_account(bank: str, number: str, name: str, branch: str | None) -> bool:
    with session_scope() as db:
        existing = db.query(BankAccount).filter(BankAccount.account_number == number).first()
        if existing:
            existing.is_active = True
            logger.info("Reactivated bank account %s (%s)", number, existing.bank_name)
            return True
        db.add(BankAccount(bank_name=bank, account_number=number, account_name=name, branch=branch))
        logger.info("Added bank account %s at %s", number, bank)
        return True


def deactivate_account(number: str) -> bool:
    with session_scope() as db:
        account = db.query(BankAccount).filter(BankAccount.account_number == number).first()
        if not account:
            logger.error("Bank account not found: %s", number)
            return False
        account.is_active = False
        logger.info("Deactivated bank account %s", number)
        return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage platform receiving bank accounts")
    parser.add_argument("--bank")
    parser.add_argument("--number")
    parser.add_argument("--name")
    parser.add_argument("--branch")
    parser.add_argument("--deactivate", metavar="ACCOUNT_NUMBER")
    args = parser.parse_args()

    init_logging()
    if args.deactivate:
        return 0 if deactivate_account(args.deactivate) else 1
    if not (args.bank and args.number and args.name):
        parser.error("--bank, --number and --name are required")
    return 0 if add_account(args.bank, args.number, args.name, args.branch) else 1


if __name__ == "__main__":
    sys.exit(main())
