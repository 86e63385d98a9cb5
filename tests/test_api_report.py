"""
HTTP tests for /api/format-report and /api/config.
"""

from incident_formatter.api.dependencies import get_formatter
from incident_formatter.core.errors import FORMAT_SERVER_ERROR, RAW_TEXT_REQUIRED
from incident_formatter.extraction.engine import ReportFormatter

SAMPLE = "Category : Malware\nSub Category: Phishing\n\nAction & Recommendation\nBlock sender\n\nBlock domain"

EXPECTED = (
    "    Incident General Information\n"
    "Category : Malware\n"
    "Sub Categories : Phishing\n"
    "\n"
    "    Action & Recommendation\n"
    "Block sender\n"
    "Block domain"
)

MANY_FIELDS = (
    "Category : Malware\n"
    "Severity : High\n"
    "Device Action : Blocked\n"
    "Source IP : 10.0.0.1\n"
    "Hostname : malware-host-01\n"
)


def post(client, body):
    return client.post("/api/format-report", json=body)


class TestFormatReport:
    def test_end_to_end(self, client):
        resp = post(client, {"rawText": SAMPLE})
        assert resp.status_code == 200
        data = resp.json()
        assert data["formattedText"] == EXPECTED
        assert data["extractedFields"] == {
            "category": {"label": "Category", "value": "Malware"},
            "subCategories": {"label": "Sub Categories", "value": "Phishing"},
        }
        assert data["appliedFilters"] == {}
        assert data["sectionsIncluded"] == ["general", "actionRecommendation"]

    def test_same_input_same_output(self, client):
        first = post(client, {"rawText": MANY_FIELDS}).json()
        second = post(client, {"rawText": MANY_FIELDS}).json()
        assert first == second

    def test_missing_raw_text(self, client):
        for body in ({}, {"rawText": ""}, {"rawText": 42}, {"text": "Category : X"}, ["rawText"]):
            resp = post(client, body)
            assert resp.status_code == 400
            assert resp.json() == {"message": RAW_TEXT_REQUIRED}

    def test_no_body(self, client):
        resp = client.post("/api/format-report")
        assert resp.status_code == 400
        assert resp.json() == {"message": RAW_TEXT_REQUIRED}

    def test_malformed_filters_are_input_errors(self, client):
        resp = post(client, {"rawText": SAMPLE, "fieldFilters": {"maxFields": "lots"}})
        assert resp.status_code == 400
        assert "maxFields" in resp.json()["message"]

    def test_unrecognized_content(self, client):
        resp = post(client, {"rawText": "lorem ipsum\ndolor sit amet"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["formattedText"] == ""
        assert data["extractedFields"] == {}

    def test_cutoff_content_never_extracted(self, client):
        raw = "Category : Malware\nAdditional details\nSeverity : High\nAction & Recommendation\nWipe"
        data = post(client, {"rawText": raw}).json()
        assert list(data["extractedFields"]) == ["category"]
        assert "Severity" not in data["formattedText"]
        assert "Wipe" not in data["formattedText"]

    def test_max_fields(self, client):
        data = post(client, {"rawText": MANY_FIELDS, "fieldFilters": {"maxFields": 2}}).json()
        assert list(data["extractedFields"]) == ["category", "deviceAction"]
        assert data["appliedFilters"] == {"maxFields": 2}

    def test_include_only(self, client):
        data = post(client, {"rawText": MANY_FIELDS, "fieldFilters": {"includeOnly": ["MALWARE"]}}).json()
        assert list(data["extractedFields"]) == ["category", "hostname"]
        assert "Severity" not in data["formattedText"]

    def test_include_and_exclude_fields(self, client):
        filters = {"includeFields": ["category", "severity", "sourceIp"], "excludeFields": ["severity"]}
        data = post(client, {"rawText": MANY_FIELDS, "fieldFilters": filters}).json()
        assert list(data["extractedFields"]) == ["category", "sourceIp"]
        assert data["formattedText"] == (
            "    Incident General Information\nCategory : Malware\nSource IP : 10.0.0.1"
        )

    def test_custom_fields_apply_to_one_request_only(self, client):
        custom = {"ticketId": {"keywords": ["Ticket ID"], "label": "Ticket", "priority": 0}}
        raw = "Ticket ID : INC-42\nCategory : Malware"
        data = post(client, {"rawText": raw, "customFields": custom}).json()
        assert data["extractedFields"]["ticketId"] == {"label": "Ticket", "value": "INC-42"}
        assert data["formattedText"].endswith("Category : Malware\nTicket : INC-42")

        data = post(client, {"rawText": raw}).json()
        assert "ticketId" not in data["extractedFields"]

    def test_sections_override(self, client):
        data = post(
            client,
            {"rawText": SAMPLE, "sections": {"actionRecommendation": {"enabled": False}}},
        ).json()
        assert data["sectionsIncluded"] == ["general"]
        assert "Block sender" not in data["formattedText"]

    def test_custom_section(self, client):
        body = {
            "rawText": "Category : Malware\nAnalyst : jdoe",
            "customFields": {"analyst": {"keywords": ["Analyst"], "section": "triage", "label": "Analyst"}},
            "sections": {"triage": {"enabled": True, "label": "Triage"}},
        }
        data = post(client, body).json()
        assert data["formattedText"] == (
            "    Incident General Information\n"
            "Category : Malware\n"
            "\n"
            "    Triage\n"
            "Analyst : jdoe"
        )
        assert data["sectionsIncluded"] == ["general", "triage"]

    def test_pipeline_failure_is_generic_500(self, app, client):
        class Exploding(ReportFormatter):
            def format(self, *args, **kwargs):
                raise RuntimeError("regex engine exploded on secret input")

        app.dependency_overrides[get_formatter] = lambda: Exploding()
        resp = post(client, {"rawText": SAMPLE})
        assert resp.status_code == 500
        assert resp.json() == {"message": FORMAT_SERVER_ERROR}
        assert "secret" not in resp.text


class TestConfigAdmin:
    def test_read(self, client):
        data = client.get("/api/config").json()
        assert data["fieldConfig"]["category"]["keywords"] == ["Category"]
        assert data["sectionConfig"]["general"]["label"] == "Incident General Information"

    def test_update_then_format(self, client):
        resp = client.post(
            "/api/config",
            json={"fieldConfig": {"category": {"keywords": ["Classification"], "label": "Class", "priority": 1}}},
        )
        assert resp.status_code == 200
        merged = resp.json()
        assert merged["fieldConfig"]["category"]["label"] == "Class"
        assert merged["fieldConfig"]["severity"]["label"] == "Severity"

        data = post(client, {"rawText": "Classification : Worm"}).json()
        assert data["formattedText"] == "    Incident General Information\nClass : Worm"

    def test_disable_field(self, client):
        client.post("/api/config", json={"fieldConfig": {"category": {"keywords": ["Category"], "enabled": False}}})
        data = post(client, {"rawText": SAMPLE}).json()
        assert "category" not in data["extractedFields"]

    def test_missing_payload(self, client):
        for body in ({}, {"other": 1}, ["fieldConfig"]):
            resp = client.post("/api/config", json=body)
            assert resp.status_code == 400
            assert "fieldConfig" in resp.json()["message"]

    def test_structural_error_changes_nothing(self, client):
        before = client.get("/api/config").json()
        resp = client.post("/api/config", json={"fieldConfig": {"category": "Category"}})
        assert resp.status_code == 400
        assert client.get("/api/config").json() == before


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/ready").json() == {"ready": True}
