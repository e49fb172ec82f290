"""Croatian bank directory (VBDI bank codes) used when generating an IBAN from a bank name"""

from typing import List, Optional

from fintools_gateway.domain.models import Bank

CROATIAN_BANKS: List[Bank] = [
    Bank(code="1001005", name="Hrvatska narodna banka"),
    Bank(code="2340009", name="Privredna banka Zagreb d.d."),
    Bank(code="2360000", name="Zagrebačka banka d.d."),
    Bank(code="2380006", name="Istarska kreditna banka Umag d.d."),
    Bank(code="2390001", name="Hrvatska poštanska banka d.d."),
    Bank(code="2402006", name="Erste&Steiermärkische Bank d.d."),
    Bank(code="2407000", name="OTP banka d.d."),
    Bank(code="2484008", name="Raiffeisenbank Austria d.d."),
    Bank(code="2485003", name="Croatia banka d.d."),
    Bank(code="2488001", name="BKS Bank AG"),
    Bank(code="2500009", name="Addiko Bank d.d."),
]


def find_bank(query: str) -> Optional[Bank]:
    """Look a bank up by exact 7-digit code or case-insensitive name"""
    needle = query.strip().lower()
    for bank in CROATIAN_BANKS:
        if bank.code == needle or bank.name.lower() == needle:
            return bank
    return None


def search_banks(query: str) -> List[Bank]:
    """Every whitespace-separated term must match the bank name or code"""
    terms = query.lower().split()
    if not terms:
        return list(CROATIAN_BANKS)
    return [
        bank
        for bank in CROATIAN_BANKS
        if all(term in bank.name.lower() or term in bank.code for term in terms)
    ]
