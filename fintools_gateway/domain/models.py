"""Domain models - pure Python dataclasses representing validation and derivation results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fintools_gateway.config import settings


class StepKind(str, Enum):
    """Outcome of a single trace step"""

    INFORMATIONAL = "informational"
    INTERMEDIATE = "intermediate"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ChecksumStep:
    """One stage of a checksum computation, kept for step-by-step display"""

    stage_label: str
    inputs: str = ""
    computation: str = ""
    output: str = ""
    outcome_kind: StepKind = StepKind.INFORMATIONAL


@dataclass
class ValidationResult:
    """Structured outcome of a validator: verdict, accumulated errors and trace"""

    is_valid: bool
    error_kind: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    steps: List[ChecksumStep] = field(default_factory=list)
    incomplete: bool = False  # Too short to judge yet (still being typed)

    @property
    def status(self) -> str:
        if self.is_valid:
            return "valid"
        return "incomplete" if self.incomplete else "invalid"


@dataclass(frozen=True)
class IbanBreakdown:
    """Croatian IBAN split into its nested fields"""

    country_code: str
    check_digits: str
    bank_code: str
    account_number: str


@dataclass(frozen=True)
class Bank:
    """Croatian bank as listed in the VBDI register"""

    code: str  # 7-digit bank code (6 base + 1 control)
    name: str


@dataclass(frozen=True)
class BinRecord:
    """Issuer range from the static BIN table"""

    bin: str
    bin_length: int
    bank: str
    country: str
    currency: str
    card_network: str
    card_category: str  # Credit, Debit, Prepaid
    valid_lengths: List[int]
    active: bool = True
    bank_code: Optional[str] = None
    card_tier: Optional[str] = None  # Standard, Gold, Platinum, ...


@dataclass(frozen=True)
class CardStructure:
    """Card number decomposed into MII / BIN / account / check digit"""

    mii: str
    mii_description: str
    bin: str
    issuer_identification: str  # BIN without the MII digit
    account_identifier: str
    check_digit: str


@dataclass
class CardInfo:
    """Output of full card validation"""

    is_valid: bool
    network: Optional[str]
    length: int
    luhn_valid: bool
    structure: CardStructure
    errors: List[str] = field(default_factory=list)
    bank: Optional[str] = None
    country: Optional[str] = None
    card_category: Optional[str] = None
    card_tier: Optional[str] = None
    incomplete: bool = False  # Fewer digits than the shortest card

    @property
    def status(self) -> str:
        if self.is_valid:
            return "valid"
        return "incomplete" if self.incomplete else "invalid"


class MnemonicState(str, Enum):
    """Terminal states of the recovery phrase state machine"""

    EMPTY = "empty"
    WRONG_WORD_COUNT = "wrong_word_count"
    UNKNOWN_WORDS = "unknown_words"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    VALID = "valid"


@dataclass
class MnemonicValidation:
    """Result of the word count / wordlist / checksum checks"""

    state: MnemonicState
    words: List[str]
    invalid_words: List[str] = field(default_factory=list)
    entropy_hex: Optional[str] = None
    steps: List[ChecksumStep] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.state is MnemonicState.VALID


@dataclass(frozen=True)
class DerivedKeyPair:
    """Key material and address for one chain"""

    chain: str
    derivation_path: str
    private_key: str
    public_key: str
    address: str


@dataclass
class DerivationResult:
    """Everything derived from a valid recovery phrase"""

    entropy_hex: str
    seed_hex: str
    keys: List[DerivedKeyPair]


@dataclass
class PaymentSlip:
    """HUB3 payment order, the data carried by the PDF417 barcode"""

    receiver_name: str
    iban: str
    amount_cents: int = 0
    currency: str = field(default_factory=lambda: settings.hub3_currency)
    sender_name: str = ""
    sender_street: str = ""
    sender_postcode: str = ""
    sender_city: str = ""
    receiver_street: str = ""
    receiver_postcode: str = ""
    receiver_city: str = ""
    model: str = "00"
    reference: str = ""
    purpose: str = field(default_factory=lambda: settings.hub3_default_purpose)
    description: str = ""
