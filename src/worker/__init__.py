"""Out-of-band workers for the ledger service"""
from .provision_accounts import AccountProvisionerWorker

__all__ = ["AccountProvisionerWorker"]
