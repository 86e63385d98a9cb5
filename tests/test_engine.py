from incident_formatter.extraction.engine import ReportFormatter, apply_cutoff, format_report
from incident_formatter.extraction.models import FieldDefinition, FilterSpec
from incident_formatter.registry.field_registry import FieldRegistry

SAMPLE = (
    "Category : Malware\n"
    "Sub Category: Phishing\n"
    "\n"
    "Action & Recommendation\n"
    "Block sender\n"
    "\n"
    "Block domain"
)

EXPECTED = (
    "    Incident General Information\n"
    "Category : Malware\n"
    "Sub Categories : Phishing\n"
    "\n"
    "    Action & Recommendation\n"
    "Block sender\n"
    "Block domain"
)

TABULAR_EXPORT = (
    "Category : Intrusion\tSeverity : High\tDevice Action : Allowed\n"
    "Start Time : 2024-03-01 10:00\tEnd Time : 2024-03-01 10:05\n"
    "Source IP : 10.1.1.5\tDestination IP : 203.0.113.9\tDestination Port : 443\n"
    "Incident Information\n"
    "Incident Detail: Outbound beacon to known C2 host\n"
    "Event Time : 2024-03-01 10:00\n"
    "Action & Recommendation\n"
    "Isolate the host\n"
    "\n"
    "Rotate credentials\n"
    "Graph\n"
    "Severity : Low\n"
    "Hostname : should-not-appear\n"
)


class TestApplyCutoff:
    def test_cuts_at_graph_line(self):
        assert apply_cutoff("a\n  Graph of traffic\nb") == "a\n"

    def test_cuts_at_additional_detail_case_insensitive(self):
        assert apply_cutoff("a\nADDITIONAL DETAILS\nb") == "a\n"

    def test_no_marker_keeps_text(self):
        assert apply_cutoff("a\nbar graph\nb") == "a\nbar graph\nb"


class TestReportFormatter:
    def test_general_fields_and_action_block(self):
        result = format_report(SAMPLE, FieldRegistry().snapshot())
        assert result.formatted_text == EXPECTED
        assert {k: v.value for k, v in result.extracted_fields.items()} == {
            "category": "Malware",
            "subCategories": "Phishing",
        }
        assert result.sections_included == ["general", "actionRecommendation"]

    def test_idempotent(self):
        snap = FieldRegistry().snapshot()
        formatter = ReportFormatter()
        assert formatter.format(TABULAR_EXPORT, snap) == formatter.format(TABULAR_EXPORT, snap)

    def test_tabular_export_with_cutoff(self):
        result = format_report(TABULAR_EXPORT, FieldRegistry().snapshot())
        values = {k: v.value for k, v in result.extracted_fields.items()}
        assert values["severity"] == "High"
        assert values["deviceAction"] == "Allowed"
        assert values["destinationPort"] == "443"
        assert values["endTime"] == "2024-03-01 10:05"
        assert "hostname" not in values
        assert "should-not-appear" not in result.formatted_text
        assert "Incident Information\nOutbound beacon to known C2 host\n" in result.formatted_text
        assert result.formatted_text.endswith("Isolate the host\nRotate credentials")

    def test_unrecognized_input(self):
        result = format_report("hello there\nnothing to see", FieldRegistry().snapshot())
        assert result.formatted_text == ""
        assert result.extracted_fields == {}
        assert result.sections_included == []

    def test_filters_apply_to_general_fields_only(self):
        snap = FieldRegistry().snapshot().overlay(
            fields={"owner": FieldDefinition(keywords=["Owner"], section="triage", label="Owner")}
        )
        text = "Category : Malware\nSeverity : High\nOwner : soc-team"
        result = format_report(text, snap, FilterSpec(max_fields=1))
        assert list(result.extracted_fields) == ["category", "owner"]

    def test_fields_tagged_with_free_text_sections_are_ignored(self):
        snap = FieldRegistry().snapshot().overlay(
            fields={"detail": FieldDefinition(keywords=["Detail"], section="incidentInfo")}
        )
        result = format_report("Detail : something", snap)
        assert result.extracted_fields == {}

    def test_wildcard_values_keep_their_asterisks(self):
        text = "Hostname : *.corp.example.com\nUsername : svc_backup*\nfoo"
        result = format_report(text, FieldRegistry().snapshot())
        assert {k: v.value for k, v in result.extracted_fields.items()} == {
            "hostname": "*.corp.example.com",
            "username": "svc_backup*",
        }

    def test_empty_emphasized_label_stays_absent(self):
        result = format_report("**Category:**\n**Severity:** High", FieldRegistry().snapshot())
        assert {k: v.value for k, v in result.extracted_fields.items()} == {"severity": "High"}
