"""Tests for the ACH (NACHA) encoder."""

from __future__ import annotations

from decimal import Decimal

import pytest

from payrail.core.exceptions import EncodingError
from payrail.encoders.nacha import (
    FILLER_RECORD,
    ACHEncoder,
    BatchControl,
    EntryDetail,
    entry_hash,
)
from payrail.models.payment import BankFileMetadata
from payrail.services.bank_files import generate_bank_file
from tests.fakes import make_payment


def _lines(payments, metadata, now, **kwargs):
    return ACHEncoder(**kwargs).encode(payments, metadata, now).split("\n")


class TestLayout:
    def test_every_record_is_94_characters(self, payments, metadata, now):
        lines = _lines(payments, metadata, now)
        assert all(len(line) == 94 for line in lines)

    def test_record_type_order(self, payments, metadata, now):
        lines = _lines(payments, metadata, now)
        assert [line[0] for line in lines] == ["1", "5", "6", "6", "6", "8", "9"]

    def test_file_header_dates(self, payments, metadata, now):
        header = _lines(payments, metadata, now)[0]
        assert header[:3] == "101"
        assert header[23:29] == "240115"
        assert header[29:33] == "0930"
        assert header[34:37] == "094"
        assert header[40:63] == "BANK".ljust(23)

    def test_immediate_destination_has_leading_blank(self, payments, now):
        meta = BankFileMetadata(immediate_destination="21000021", immediate_origin="123456789")
        header = _lines(payments, meta, now)[0]
        assert header[3:13] == " 021000021"
        assert header[13:23] == " 123456789"

    def test_batch_header_is_credits_only_ppd(self, payments, metadata, now):
        batch = _lines(payments, metadata, now)[1]
        assert batch[1:4] == "220"
        assert batch[4:20] == "ACME PAYROLL".ljust(16)
        assert batch[40:50] == "1234567890"
        assert batch[50:53] == "PPD"
        assert batch[53:63] == "PAYROLL".ljust(10)
        assert batch[69:75] == "240131"  # first payment's effective date
        assert batch[79:87] == "02100002"
        assert batch[87:94] == "0000001"

    def test_effective_date_falls_back_to_creation_date(self, metadata, now):
        batch = _lines([make_payment(effective_date=None)], metadata, now)[1]
        assert batch[69:75] == "240115"

    def test_company_id_is_zero_filled(self, payments, now):
        batch = _lines(payments, BankFileMetadata(company_id="42"), now)[1]
        assert batch[40:50] == "0000000042"


class TestEntryDetail:
    def test_fields(self, payments, metadata, now):
        entry = _lines(payments, metadata, now)[2]
        assert entry[1:3] == "22"
        assert entry[3:11] == "02100002"
        assert entry[11] == "1"
        assert entry[12:29] == "12345".ljust(17)
        assert entry[29:39] == "0000150050"
        assert entry[39:54] == "E1".ljust(15)
        assert entry[54:76] == "Jane Doe".ljust(22)
        assert entry[78] == "0"

    def test_trace_numbers_are_unique_and_sequenced(self, payments, metadata, now):
        entries = _lines(payments, metadata, now)[2:5]
        assert [e[79:94] for e in entries] == [
            "021000020000001",
            "021000020000002",
            "021000020000003",
        ]

    def test_long_name_is_truncated(self, metadata, now):
        name = "Maximilian Alexander Worthington-Smythe"
        entry = _lines([make_payment(employee_name=name)], metadata, now)[2]
        assert entry[54:76] == name[:22]
        assert len(entry) == 94

    def test_short_routing_number_is_zero_filled(self, metadata, now):
        entry = _lines([make_payment(routing_number="21000021")], metadata, now)[2]
        assert entry[3:12] == "021000021"

    def test_whole_cents(self, metadata, now):
        entry = _lines([make_payment(amount=Decimal("10.05"))], metadata, now)[2]
        assert entry[29:39] == "0000001005"


class TestControlRecords:
    def test_totals_match_entries(self, payments, metadata, now):
        lines = _lines(payments, metadata, now)
        entries, batch_control, file_control = lines[2:5], lines[5], lines[6]
        entry_cents = sum(int(e[29:39]) for e in entries)

        assert batch_control[20:32] == "0" * 12
        assert batch_control[32:44] == str(entry_cents).zfill(12) == "000000475049"
        assert file_control[31:43] == "0" * 12
        assert file_control[43:55] == batch_control[32:44]

    def test_entry_hash(self, payments, metadata, now):
        lines = _lines(payments, metadata, now)
        # 02100002 + 01100001 + 12100024
        assert lines[5][10:20] == "0015300027"
        assert lines[6][21:31] == "0015300027"

    def test_counts(self, payments, metadata, now):
        lines = _lines(payments, metadata, now)
        assert lines[5][4:10] == "000003"
        file_control = lines[6]
        assert file_control[1:7] == "000001"
        assert file_control[7:13] == "000001"
        assert file_control[13:21] == "00000003"

    def test_block_count_rounds_up(self, metadata, now):
        batch = [make_payment(id=f"P{i}") for i in range(7)]  # 11 physical records
        file_control = _lines(batch, metadata, now)[-1]
        assert file_control[7:13] == "000002"

    def test_empty_batch(self, metadata, now):
        lines = _lines([], metadata, now)
        assert [line[0] for line in lines] == ["1", "5", "8", "9"]
        assert lines[2][4:10] == "000000"
        assert lines[2][32:44] == "0" * 12


class TestEntryHash:
    def test_drops_high_order_digits(self):
        assert entry_hash(["99999999"] * 200) == 19_999_999_800 % 10**10

    def test_renders_in_ten_digits(self):
        record = BatchControl(
            entry_addenda_count=200,
            entry_hash=entry_hash(["99999999"] * 200),
            total_credits=0,
            company_identification="0000000000",
            originating_dfi="00000000",
        )
        assert record.render()[10:20] == "9999999800"


class TestBlockPadding:
    def test_pads_to_multiple_of_ten(self, payments, metadata, now):
        lines = _lines(payments, metadata, now, block_padding=True)
        assert len(lines) == 10
        assert lines[7:] == [FILLER_RECORD] * 3
        assert lines[6][0] == "9" and lines[6] != FILLER_RECORD

    def test_no_padding_when_already_blocked(self, metadata, now):
        batch = [make_payment(id=f"P{i}") for i in range(6)]  # exactly 10 records
        assert len(_lines(batch, metadata, now, block_padding=True)) == 10

    def test_off_by_default(self, payments, metadata, now):
        assert FILLER_RECORD not in _lines(payments, metadata, now)


class TestErrors:
    def test_non_numeric_routing_reports_index(self, metadata, now):
        batch = [make_payment(), make_payment(routing_number="02100002X")]
        with pytest.raises(EncodingError) as excinfo:
            ACHEncoder().encode(batch, metadata, now)
        assert excinfo.value.index == 1

    def test_missing_account_number(self, metadata, now):
        with pytest.raises(EncodingError, match="account_number") as excinfo:
            ACHEncoder().encode([make_payment(account_number="")], metadata, now)
        assert excinfo.value.index == 0

    def test_account_number_too_long(self, metadata, now):
        with pytest.raises(EncodingError):
            ACHEncoder().encode([make_payment(account_number="1" * 18)], metadata, now)

    def test_amount_overflow(self, metadata, now):
        with pytest.raises(EncodingError, match="amount"):
            ACHEncoder().encode([make_payment(amount=Decimal("100000000.00"))], metadata, now)

    def test_sub_cent_amount_rejected_with_index(self, now):
        batch = [{"employeeName": "A", "amount": "10.00"}, {"employeeName": "B", "amount": "10.005"}]
        with pytest.raises(EncodingError, match="amount") as excinfo:
            generate_bank_file("ACH", batch, now=now)
        assert excinfo.value.index == 1

    @pytest.mark.parametrize("name", ["Jane\nDoe", "Jane\rDoe", "Tab\tName"])
    def test_control_characters_in_name_rejected(self, name, metadata, now):
        with pytest.raises(EncodingError, match="individual_name") as excinfo:
            ACHEncoder().encode([make_payment(), make_payment(employee_name=name)], metadata, now)
        assert excinfo.value.index == 1

    def test_non_ascii_name_rejected(self, metadata, now):
        with pytest.raises(EncodingError) as excinfo:
            ACHEncoder().encode([make_payment(employee_name="Zoë Ångström")], metadata, now)
        assert excinfo.value.index == 0

    def test_non_ascii_company_name_is_metadata_error(self, payments, now):
        with pytest.raises(EncodingError) as excinfo:
            ACHEncoder().encode(payments, BankFileMetadata(company_name="Société"), now)
        assert excinfo.value.index is None

    def test_bad_originating_dfi_is_metadata_error(self, payments, now):
        with pytest.raises(EncodingError) as excinfo:
            ACHEncoder().encode(payments, BankFileMetadata(originating_dfi="ABC"), now)
        assert excinfo.value.index is None

    def test_nine_digit_originating_dfi_drops_check_digit(self, payments, now):
        lines = _lines(payments, BankFileMetadata(originating_dfi="021000021"), now)
        assert lines[1][79:87] == "02100002"


class TestRenderRecord:
    def test_numeric_overflow_raises(self):
        entry = EntryDetail(
            receiving_dfi="02100002",
            check_digit="1",
            dfi_account_number="1",
            amount=10**10,
            trace_number="0",
        )
        with pytest.raises(ValueError, match="amount"):
            entry.render()

    def test_does_not_mutate_input(self, payments, metadata, now):
        snapshot = list(payments)
        ACHEncoder().encode(payments, metadata, now)
        assert payments == snapshot

    @pytest.mark.parametrize("value", ["Jane\nDoe", "Zoë", "\x00"])
    def test_alphanumeric_field_must_be_printable_ascii(self, value):
        entry = EntryDetail(
            receiving_dfi="02100002",
            check_digit="1",
            dfi_account_number="1",
            amount=100,
            individual_name=value,
            trace_number="0",
        )
        with pytest.raises(ValueError, match="individual_name"):
            entry.render()
