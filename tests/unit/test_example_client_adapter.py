from app.enrichment.enricher import Enricher, parse_embedded_json
from app.enrichment.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    def test_answer_embeds_default_response(self) -> None:
        adapter = ExampleClientAdapter()
        raw = adapter.create_chat_completion(
            model="example", temperature=0.2, system_prompt="", user_prompt="text"
        )
        assert raw.startswith("Here is the analysis:")
        assert parse_embedded_json(raw) == ExampleClientAdapter.DEFAULT_RESPONSE

    def test_enricher_accepts_example_answer(self) -> None:
        enricher = Enricher(client=ExampleClientAdapter(), model="example")
        analysis = enricher.analyze("Quarterly report")
        assert analysis.summary == "No summary available."
        assert analysis.category == "other"
        assert analysis.priority == "medium"
        assert analysis.tags == []
