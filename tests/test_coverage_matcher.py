from quote_reconciler.models.scheme import Coverage, QuotationRecord
from quote_reconciler.services.coverage_matcher import CaseInsensitiveMatcher, collect_coverage_identities


class TestCaseInsensitiveMatcher:

    def test_resolves_to_known_identity_ignoring_case(self):
        matcher = CaseInsensitiveMatcher()

        assert matcher.resolve("incendio", ["Robo", "Incendio"]) == "Incendio"
        assert matcher.resolve("INCENDIO", ["Incendio"]) == "Incendio"

    def test_unknown_name_is_its_own_identity(self):
        assert CaseInsensitiveMatcher().resolve("Terremoto", ["Incendio"]) == "Terremoto"

    def test_whitespace_and_plurals_are_distinct(self):
        matcher = CaseInsensitiveMatcher()

        assert matcher.resolve("Incendio ", ["Incendio"]) == "Incendio "
        assert matcher.resolve("Incendios", ["Incendio"]) == "Incendios"
        assert matcher.resolve("R.C.", ["Responsabilidad Civil"]) == "R.C."


class TestCollectCoverageIdentities:

    def test_first_seen_order_across_records(self, make_record):
        records = [
            make_record("A", coverages=[Coverage(name="Robo"), Coverage(name="Incendio")]),
            make_record("B", coverages=[Coverage(name="Terremoto"), Coverage(name="robo")]),
        ]

        assert collect_coverage_identities(records) == ["Robo", "Incendio", "Terremoto"]

    def test_case_variants_merge_into_first_spelling(self, make_record):
        records = [
            make_record("A", coverages=[Coverage(name="Incendio")]),
            make_record("B", coverages=[Coverage(name="incendio")]),
        ]

        assert collect_coverage_identities(records) == ["Incendio"]

    def test_trailing_space_does_not_merge(self, make_record):
        records = [
            make_record("A", coverages=[Coverage(name="Incendio ")]),
            make_record("B", coverages=[Coverage(name="Incendio")]),
        ]

        assert collect_coverage_identities(records) == ["Incendio ", "Incendio"]

    def test_records_without_coverages(self, make_record):
        records = [make_record("A", coverages=[]), QuotationRecord(insurer="B", total_premium=10)]

        assert collect_coverage_identities(records) == []

    def test_custom_matcher_is_used(self, make_record):
        class StrippingMatcher(CaseInsensitiveMatcher):
            @staticmethod
            def _key(name):
                return name.strip().lower()

        records = [
            make_record("A", coverages=[Coverage(name="Incendio ")]),
            make_record("B", coverages=[Coverage(name="incendio")]),
        ]

        assert collect_coverage_identities(records, StrippingMatcher()) == ["Incendio "]
