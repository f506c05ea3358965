from unittest.mock import MagicMock

import pytest

from file_migrator.database.models import SubmissionRow
from file_migrator.origin.answer_payload_locator import AnswerPayloadLocator, answer_urls
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.models import FetchedFile, FetchJob


def _make_locator(api_key: str = "") -> tuple[AnswerPayloadLocator, MagicMock]:
    http_client = MagicMock(spec=OriginHttpClient)
    locator = AnswerPayloadLocator(
        http_client,
        base_url="https://eu-api.jotform.com",
        api_key=api_key,
        upload_hosts=["www.jotform.com"],
    )
    return locator, http_client


def _payload(**answers: object) -> dict[str, object]:
    return {"answers": answers}


class TestReferences:
    def test_keeps_only_file_upload_answers(self) -> None:
        locator, _http = _make_locator()
        row = SubmissionRow(
            "S2",
            _payload(
                **{
                    "3": {"type": "control_fileupload", "answer": "https://f.example.com/a.jpg"},
                    "4": {"type": "control_textbox", "answer": "hello"},
                    "5": "not a dict",
                }
            ),
        )

        refs = locator.references(row)

        assert [ref["field_id"] for ref in refs] == ["3"]

    @pytest.mark.parametrize("payload", [None, {}, {"answers": None}, {"answers": []}, []])
    def test_missing_answers_yield_nothing(self, payload: object) -> None:
        locator, _http = _make_locator()
        assert locator.references(SubmissionRow("S2", payload)) == []


class TestResolve:
    def test_single_and_list_answers_produce_same_job_shape(self) -> None:
        locator, _http = _make_locator()
        single = SubmissionRow(
            "S2",
            _payload(f3={"type": "control_fileupload", "answer": "https://f.example.com/u/a.jpg"}),
        )
        listed = SubmissionRow(
            "S2",
            _payload(
                f3={"type": "control_fileupload", "answer": ["https://f.example.com/u/a.jpg"]}
            ),
        )

        assert locator.resolve(single) == locator.resolve(listed)

    def test_two_urls_produce_two_jobs(self) -> None:
        locator, _http = _make_locator()
        row = SubmissionRow(
            "S2",
            _payload(
                f3={
                    "type": "control_fileupload",
                    "answer": [
                        "https://f.example.com/u/front.jpg",
                        "https://f.example.com/u/back.jpg",
                    ],
                }
            ),
        )

        jobs = locator.resolve(row)

        assert jobs == [
            FetchJob("S2", "f3", "https://f.example.com/u/front.jpg", "front.jpg"),
            FetchJob("S2", "f3", "https://f.example.com/u/back.jpg", "back.jpg"),
        ]


class TestAnswerUrls:
    def test_drops_empty_and_non_string_values(self) -> None:
        assert answer_urls(["https://a/x.jpg", "", None, 5, "  "]) == ["https://a/x.jpg"]

    def test_none_answer_yields_nothing(self) -> None:
        assert answer_urls(None) == []


class TestReferencesWithEmptyAnswers:
    @pytest.mark.parametrize("answer", ["", "   ", [], None, [None, ""]])
    def test_upload_answer_without_urls_is_dropped(self, answer: object) -> None:
        locator, _http = _make_locator()
        row = SubmissionRow("S8", _payload(f3={"type": "control_fileupload", "answer": answer}))
        assert locator.references(row) == []


class TestFetch:
    def test_fetches_url_without_params_when_no_api_key(self) -> None:
        locator, http_client = _make_locator()
        http_client.get.return_value = FetchedFile(b"img", "image/jpeg")

        locator.fetch(FetchJob("S2", "f3", "https://www.jotform.com/uploads/a.jpg", "a.jpg"))

        http_client.get.assert_called_once_with(
            "https://www.jotform.com/uploads/a.jpg", params=None
        )

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.jotform.com/uploads/acme/a.jpg",
            "https://EU-API.jotform.com/file/S2/f3",
        ],
    )
    def test_adds_api_key_for_origin_and_upload_hosts(self, url: str) -> None:
        locator, http_client = _make_locator(api_key="k")
        http_client.get.return_value = FetchedFile(b"img", "image/jpeg")

        locator.fetch(FetchJob("S2", "f3", url, "a.jpg"))

        http_client.get.assert_called_once_with(url, params={"apiKey": "k"})

    @pytest.mark.parametrize(
        "url",
        [
            "https://evil.example.net/up/a%2Fb.jpg",
            "https://www.jotform.com.evil.example.net/a.jpg",
        ],
    )
    def test_foreign_host_never_receives_api_key(self, url: str) -> None:
        locator, http_client = _make_locator(api_key="SECRET")
        http_client.get.return_value = FetchedFile(b"img", "image/jpeg")

        locator.fetch(FetchJob("S1", "f1", url, "a.jpg"))

        http_client.get.assert_called_once_with(url, params=None)
