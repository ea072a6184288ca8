"""
Unit tests for parsing candidate strings back into version fields
"""
import pytest
from datetime import datetime, timezone

from buildversion.exceptions import VersionParseError
from buildversion.parser import CandidateFields, assemble_timestamp, parse, scan_candidate
from buildversion.renderer import render
from buildversion.state import TimezoneMode, VersionState
from buildversion.template import compile_template


NOV_1_2012 = datetime(2012, 11, 1, 12, 34, 56, tzinfo=timezone.utc)


class TestParse:
    """Test parse() against rendered and hand-written candidates"""

    def test_full_candidate_utc(self):
        state = parse(compile_template("%M%.%m%.%b%-%d%.%t%"), "9.3.456-20121101.123456")

        assert (state.major, state.minor, state.build) == (9, 3, 456)
        assert state.timestamp == NOV_1_2012
        assert int(state.timestamp.timestamp() * 1000) == 1351773296000

    def test_counters_only(self, clock):
        state = parse(compile_template("%M%.%m%.%b%"), "9.3.456", clock=clock)
        assert (state.major, state.minor, state.build) == (9, 3, 456)
        # No date field: timestamp is "now"
        assert state.timestamp == datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("template,candidate", [
        ("%M%.%m%.%b%-%d%.%t%", "Prefix98.34.1456-2012111.123456Postfix"),
        ("%%%M%.%m%.%b%-%d%.%t%%%", "Prefix98.34.1456-2012111.123456Postfix"),
        ("%d%.%%%M%.%m%.%b%-%t%%%", "2012111.Prefix98.34.1456-123456Postfix"),
        ("%d%.%%.%m%.%b%-%t%%%%M%", "2012111.Prefix.34.1456-123456Postfix98"),
    ])
    def test_literal_text_is_skipped(self, template, candidate):
        state = parse(compile_template(template), candidate)

        assert state.major == 98
        assert state.minor == 34
        assert state.build == 1456
        assert state.timestamp == NOV_1_2012

    def test_separators_are_not_verified(self):
        """Any non-digit text separates fields, not just the template's literals"""
        state = parse(compile_template("%M%.%m%"), "release-7/8")
        assert (state.major, state.minor) == (7, 8)

    def test_unused_counters_stay_zero(self):
        state = parse(compile_template("%m%"), "12")
        assert (state.major, state.minor, state.build) == (0, 12, 0)

    def test_date_without_time_is_midnight(self):
        state = parse(compile_template("%d%"), "20121110")
        assert state.timestamp == datetime(2012, 11, 10, tzinfo=timezone.utc)

    def test_parse_keeps_timezone_mode(self):
        state = parse(compile_template("%M%"), "1", TimezoneMode.LOCAL)
        assert state.timezone_mode is TimezoneMode.LOCAL

    @pytest.mark.parametrize("template,candidate", [
        ("%d%.%%.%m%.%b%-%t%%%%M%", "2012111.Prefix.34.1456-123456Postfix"),
        ("%d%.%%.%m%.%M%-%t%%%%b%", "2012111.Prefix.34.1456-123456Postfix"),
        ("%d%.%%.%b%.%M%-%t%%%%m%", "2012111.Prefix.34.1456-123456Postfix"),
        ("%d%.%%.%b%.%M%-%m%%%%t%", "2012111.Prefix.34.1456-123456Postfix"),
        ("%m%.%%.%b%.%M%-%t%%%%d%", "2012111.Prefix.34.1456-123456Postfix"),
        ("%M%.%m%.%b%-%d%.%t%", "9.3.456-121101.123456"),
        ("%M%", "no digits here"),
        ("%M%", ""),
    ])
    def test_parse_failures(self, template, candidate):
        with pytest.raises(VersionParseError):
            parse(compile_template(template), candidate)

    def test_failure_reports_template_position(self):
        template = "%d%.%%.%m%.%b%-%t%%%%M%"
        with pytest.raises(VersionParseError, match="%M%") as exc_info:
            parse(compile_template(template), "2012111.Prefix.34.1456-123456Postfix")
        assert exc_info.value.position == template.index("%M%")

    def test_truncated_date_reports_date_error(self):
        with pytest.raises(VersionParseError, match="Unable to match date"):
            parse(compile_template("%d%.%t%"), "201211.123456")

    def test_oversized_counter_is_a_parse_error(self):
        template = "v%M%.%b%"
        with pytest.raises(VersionParseError, match="%b%") as exc_info:
            parse(compile_template(template), "v1." + "9" * 5000)
        assert exc_info.value.position == template.index("%b%")

    def test_oversized_date_is_a_parse_error(self):
        with pytest.raises(VersionParseError, match="Unable to match date"):
            parse(compile_template("%d%"), "2012" + "9" * 5000)

    def test_adjacent_fields_share_one_digit_run(self):
        """Without a separator the first field swallows the whole run"""
        compiled = compile_template("%d%%t%")
        with pytest.raises(VersionParseError, match="%t%"):
            parse(compiled, "19700101000000")


class TestScanCandidate:
    """Test the raw digit-run capture"""

    def test_captures_raw_date_and_time(self):
        fields = scan_candidate(compile_template("%M%-%d%.%t%"), "v3-20240229.235959")
        assert fields == CandidateFields(major=3, date="20240229", time="235959")

    def test_literal_only_template_captures_nothing(self):
        assert scan_candidate(compile_template("ThisIsATest"), "anything 123") == CandidateFields()


class TestAssembleTimestamp:
    """Test lenient date/time assembly"""

    def test_date_and_time(self):
        assert assemble_timestamp("20121101", "123456") == NOV_1_2012

    def test_seven_digit_date(self):
        assert assemble_timestamp("2012111", "123456") == NOV_1_2012

    @pytest.mark.parametrize("date,expected", [
        ("20121301", datetime(2013, 1, 1, tzinfo=timezone.utc)),
        ("20120230", datetime(2012, 3, 1, tzinfo=timezone.utc)),
        ("20121100", datetime(2012, 10, 31, tzinfo=timezone.utc)),
        ("20120015", datetime(2011, 12, 15, tzinfo=timezone.utc)),
    ])
    def test_out_of_range_values_roll_over(self, date, expected):
        assert assemble_timestamp(date) == expected

    def test_time_rolls_over(self):
        assert assemble_timestamp("20121231", "246000") == datetime(2013, 1, 1, 1, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("date,time", [
        ("121101", ""),
        ("2012", "123456"),
        ("00000101", ""),
        ("20121101", "1234"),
    ])
    def test_invalid_dates(self, date, time):
        with pytest.raises(VersionParseError):
            assemble_timestamp(date, time)

    def test_local_mode_interprets_wall_clock(self):
        stamp = assemble_timestamp("20210615", "083045", TimezoneMode.LOCAL)
        expected = datetime(2021, 6, 15, 8, 30, 45).astimezone()
        assert stamp == expected


class TestRoundTrip:
    """parse(render(state)) gives back what the template encodes"""

    TEMPLATES = [
        "%M%.%m%-%d%.%t%",
        "v%M%.%m%.%b%-%d%.%t%",
        "%b%_%M%",
        "build%b%",
        "%%%d%%%%t%%%",
        "%t%.%d%",
        "rel-%m%.%M%",
    ]

    STATES = [
        (0, 0, 0, datetime(1970, 1, 1, tzinfo=timezone.utc)),
        (1, 22, 333, datetime(2012, 11, 1, 12, 34, 56, tzinfo=timezone.utc)),
        (10, 0, 7, datetime(2099, 12, 31, 23, 59, 59, tzinfo=timezone.utc)),
    ]

    @pytest.mark.parametrize("template", TEMPLATES)
    @pytest.mark.parametrize("mode", [TimezoneMode.UTC, TimezoneMode.LOCAL])
    def test_round_trip(self, template, mode):
        compiled = compile_template(template)

        for major, minor, build, stamp in self.STATES:
            original = VersionState(major, minor, build, stamp, mode)
            rendered = render(compiled, original)
            parsed = parse(compiled, rendered, mode)

            assert parsed.major == (major if compiled.uses_major else 0)
            assert parsed.minor == (minor if compiled.uses_minor else 0)
            assert parsed.build == (build if compiled.uses_build else 0)
            if compiled.uses_date and compiled.uses_time:
                assert parsed.timestamp == stamp
            assert render(compiled, parsed) == rendered
