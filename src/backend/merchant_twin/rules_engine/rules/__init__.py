from .settle_funds import SETTLE_FUNDS
from .pin_puk import PIN_PUK
from .sim_swap import SIM_SWAP
from .account_status import ACCOUNT_STATUS
from .start_key import START_KEY
from .statement import STATEMENT
from .kyc_change import KYC_CHANGE
from .notifications import NOTIFICATIONS
from .balance import BALANCE
from .dormant_op import DORMANT_OP
from .pin_unlock import PIN_UNLOCK
from .application import APPLICATION

__all__ = [
    "SETTLE_FUNDS",
    "PIN_PUK",
    "SIM_SWAP",
    "ACCOUNT_STATUS",
    "START_KEY",
    "STATEMENT",
    "KYC_CHANGE",
    "NOTIFICATIONS",
    "BALANCE",
    "DORMANT_OP",
    "PIN_UNLOCK",
    "APPLICATION",
]
