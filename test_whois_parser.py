#!/usr/bin/env python3
"""
Test suite for the WHOIS response classifier

Usage:
    python -m pytest test_whois_parser.py
"""

from tld_free.models import Verdict
from tld_free.whois_parser import (
    AVAILABILITY_RULES,
    WhoisRecord,
    classify,
    classify_availability,
    extract_expiry_date,
    find_expiry_line,
)

VERISIGN_RESPONSE = """\
   Domain Name: GOOGLE.COM
   Registry Domain ID: 2138514_DOMAIN_COM-VRSN
   Registrar WHOIS Server: whois.markmonitor.com
   Updated Date: 2019-09-09T15:39:04Z
   Creation Date: 1997-09-15T04:00:00Z
   Registry Expiry Date: 2028-09-14T04:00:00Z
   Registrar: MarkMonitor Inc.
   Name Server: NS1.GOOGLE.COM
"""

NOMINET_RESPONSE = """\

    Domain name:
        bbc.co.uk

    Registrar:
        British Broadcasting Corporation [Tag = BBC]

    Relevant dates:
        Registered on: before Aug-1996
        Expiry date:  13-Dec-2026
        Last updated:  10-Dec-2020
"""

REGISTRO_BR_RESPONSE = """\
domain:      uol.com.br
owner:       UNIVERSO ONLINE S.A.
nserver:     a.dns.uol.com.br
created:     19960321 #9174
changed:     20230405
expires:     20270321
status:      published
"""


# =============================================================================
# Availability rules
# =============================================================================

def test_free_marker_wins_over_domain_name():
    text = "Domain Name: example.de\nStatus: free\n"
    assert classify(text) == WhoisRecord(verdict=Verdict.AVAILABLE)


def test_free_marker_is_case_insensitive():
    assert classify_availability("Domain Name: x.eu\nSTATUS:   AVAILABLE") is Verdict.AVAILABLE
    assert classify_availability("Domain Name: x.se\nThe domain x.se IS FREE.") is Verdict.AVAILABLE


def test_status_free_ignores_extra_text():
    text = "Some banner\nDomain Name: somewhere\nStatus: free\nRegistrar: nobody"
    assert classify(text).verdict is Verdict.AVAILABLE


def test_domain_name_field_means_taken():
    assert classify_availability("Domain Name: EXAMPLE.COM") is Verdict.TAKEN


def test_name_server_field_means_taken():
    assert classify_availability("Name Server: ns1.example.net") is Verdict.TAKEN


def test_registrar_field_means_taken():
    assert classify_availability("  Registrar: Example Registrar, LLC") is Verdict.TAKEN


def test_registration_fields_must_start_a_line():
    text = "No match for domain. Ask your Registrar: nothing found"
    assert classify_availability(text) is Verdict.AVAILABLE


def test_no_recognizable_fields_defaults_to_available():
    assert classify("No match for \"XYZTEST1234.COM\".") == WhoisRecord(verdict=Verdict.AVAILABLE)
    assert classify("") == WhoisRecord(verdict=Verdict.AVAILABLE)


def test_free_rules_come_before_registration_rules():
    verdicts = [verdict for _, verdict in AVAILABILITY_RULES]
    first_taken = verdicts.index(Verdict.TAKEN)
    assert all(v is Verdict.AVAILABLE for v in verdicts[:first_taken])
    assert all(v is Verdict.TAKEN for v in verdicts[first_taken:])


def test_available_record_has_no_expiry():
    text = "Status: free\nExpiry Date: 2030-01-01"
    assert classify(text).expiry_date is None


# =============================================================================
# Expiry line
# =============================================================================

def test_find_expiry_line_takes_first_match():
    text = "Registry Expiry Date: 2025-03-01\nRegistrar Registration Expiration Date: 2026-04-02"
    assert find_expiry_line(text) == "Registry Expiry Date: 2025-03-01"


def test_find_expiry_line_labels():
    assert find_expiry_line("paid-till:     2025-06-01T00:00:00Z") is not None
    assert find_expiry_line("Expiration Time: 2025-06-01 12:00:00") is not None
    assert find_expiry_line("expires:     20270321") is not None
    assert find_expiry_line("EXPIRATION DATE: 2025-06-01") is not None


def test_expires_label_must_start_the_line():
    assert find_expiry_line("   expires:     20270321") is None


def test_find_expiry_line_none():
    assert find_expiry_line("Domain Name: EXAMPLE.COM\nRegistrar: X") is None


# =============================================================================
# Date formats
# =============================================================================

def test_iso_date():
    assert extract_expiry_date("Registry Expiry Date: 2025-03-01T00:00:00Z") == "2025-03-01"


def test_day_month_year_date():
    assert extract_expiry_date("Expiry date:  13-Dec-2026") == "2026-12-13"


def test_day_month_year_pads_single_digit_day():
    assert extract_expiry_date("Expiry date: 1-mar-2027") == "2027-03-01"


def test_compact_date():
    assert extract_expiry_date("expires:     20270321") == "2027-03-21"


def test_iso_date_preferred_over_compact():
    assert extract_expiry_date("Expiry Date: 20240101 (2025-03-01)") == "2025-03-01"


def test_unknown_month_falls_through():
    assert extract_expiry_date("Expiry Date: 01-Foo-2025") is None
    assert extract_expiry_date("Expiry Date: 01-Foo-2025 20250101") == "2025-01-01"


def test_no_date_on_line():
    assert extract_expiry_date("Expiry Date: soon") is None


def test_non_ascii_digits_are_not_dates():
    # Arabic-Indic and fullwidth digits
    assert extract_expiry_date("Expiry Date: ٢٠٢٥-٠٣-٠١") is None
    assert extract_expiry_date("paid-till: ２０２５０３０１") is None


# =============================================================================
# Whole responses
# =============================================================================

def test_gtld_response():
    text = "Domain Name: EXAMPLE.COM\nRegistry Expiry Date: 2025-03-01T00:00:00Z"
    assert classify(text) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date="2025-03-01")


def test_verisign_response():
    assert classify(VERISIGN_RESPONSE) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date="2028-09-14")


def test_nominet_response():
    assert classify(NOMINET_RESPONSE) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date="2026-12-13")


def test_registro_br_response_without_registration_fields():
    # No "Domain Name:", "Name Server" or "Registrar:" line, so nothing marks it taken
    assert classify(REGISTRO_BR_RESPONSE).verdict is Verdict.AVAILABLE


def test_registro_br_expiry_when_taken():
    text = "Registrar: registro.br\n" + REGISTRO_BR_RESPONSE
    assert classify(text) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date="2027-03-21")


def test_taken_without_expiry():
    text = "Domain Name: EXAMPLE.ORG\nRegistrar: Example"
    assert classify(text) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date=None)


def test_only_first_expiry_line_is_used():
    text = (
        "Domain Name: EXAMPLE.NET\n"
        "Registrar Registration Expiration Date: soon\n"
        "Registry Expiry Date: 2025-03-01T00:00:00Z\n"
    )
    assert classify(text) == WhoisRecord(verdict=Verdict.TAKEN, expiry_date=None)
