"""Tests for the ExpiryEvaluator use case."""

from __future__ import annotations

import asyncio

import pytest

from expiry_checker.application.use_cases import ExpiryEvaluator
from expiry_checker.application.use_cases.evaluate_expiry import is_expected_error

from conftest import FakeInspector, FakeLookup


class TestExpiryEvaluator:
    """Tests for ExpiryEvaluator."""

    def test_evaluates_certificate(self) -> None:
        """A reachable host yields a certificate status."""
        evaluator = ExpiryEvaluator(FakeInspector({"a.example": 3}))
        evaluation = asyncio.run(evaluator.evaluate("a.example"))
        assert evaluation is not None
        assert evaluation.certificate is not None
        assert evaluation.certificate.days_remaining == 3
        assert evaluation.certificate_failed is False
        assert evaluation.domain is None

    def test_evaluate_normalizes_hostname(self) -> None:
        """Single evaluations apply the same name handling as batches."""
        inspector = FakeInspector()
        evaluator = ExpiryEvaluator(inspector)

        wildcard = asyncio.run(evaluator.evaluate(" *.Example.com. "))
        service = asyncio.run(evaluator.evaluate("_dmarc.example.com"))

        assert wildcard is not None
        assert wildcard.hostname == "test.example.com"
        assert service is None
        assert inspector.inspected == ["test.example.com"]

    def test_failure_does_not_shorten_batch(self) -> None:
        """A failing host is recorded while every other host is evaluated."""
        inspector = FakeInspector(
            {"a.example": 3, "c.example": 10},
            failures={"b.example": "handshake failure"},
        )
        evaluator = ExpiryEvaluator(inspector)
        evaluations = asyncio.run(
            evaluator.evaluate_all(["a.example", "b.example", "c.example"])
        )

        by_host = {e.hostname: e for e in evaluations}
        assert set(by_host) == {"a.example", "b.example", "c.example"}
        assert by_host["b.example"].certificate is None
        assert by_host["b.example"].certificate_error == "handshake failure"
        assert by_host["a.example"].certificate is not None
        assert by_host["c.example"].certificate is not None

    def test_timeout_treated_as_unreachable(self) -> None:
        """A hanging handshake times out without affecting other hosts."""
        inspector = FakeInspector({"a.example": 3}, hang={"slow.example"})
        evaluator = ExpiryEvaluator(inspector, tls_timeout=0.05)
        evaluations = asyncio.run(evaluator.evaluate_all(["slow.example", "a.example"]))

        by_host = {e.hostname: e for e in evaluations}
        slow = by_host["slow.example"]
        assert slow.certificate is None
        assert slow.certificate_error is not None
        assert "timed out" in slow.certificate_error
        assert slow.certificate_error_expected is True
        assert by_host["a.example"].certificate is not None

    def test_concurrency_is_bounded(self) -> None:
        """No more than max_concurrency checks run at once."""
        inspector = FakeInspector()
        evaluator = ExpiryEvaluator(inspector, max_concurrency=3)
        hostnames = [f"h{i}.example" for i in range(20)]
        evaluations = asyncio.run(evaluator.evaluate_all(hostnames))

        assert len(evaluations) == 20
        assert inspector.max_active <= 3

    def test_skips_unusable_and_duplicate_names(self) -> None:
        """Service records, single labels and duplicates are not checked."""
        inspector = FakeInspector()
        evaluator = ExpiryEvaluator(inspector)
        evaluations = asyncio.run(
            evaluator.evaluate_all(
                ["A.example", "a.example", "_dmarc.example.com", "localhost", "*.example.org"]
            )
        )
        assert [e.hostname for e in evaluations] == ["a.example", "test.example.org"]
        assert sorted(inspector.inspected) == ["a.example", "test.example.org"]

    def test_domain_checks_absent_by_default(self) -> None:
        """Without a registration lookup the domain result is absent."""
        evaluator = ExpiryEvaluator(FakeInspector())
        evaluations = asyncio.run(evaluator.evaluate_all(["www.example.com"]))
        assert evaluator.checks_domains is False
        assert evaluations[0].domain is None
        assert evaluations[0].domain_failed is False

    def test_domain_lookup_shared_per_root(self) -> None:
        """Registration is looked up once per registrable domain."""
        lookup = FakeLookup({"example.com": 5})
        evaluator = ExpiryEvaluator(FakeInspector(), lookup)
        evaluations = asyncio.run(
            evaluator.evaluate_all(["www.example.com", "api.example.com"])
        )

        assert lookup.looked_up == ["example.com"]
        assert all(e.domain is not None for e in evaluations)
        assert all(e.domain.days_remaining == 5 for e in evaluations if e.domain)

    def test_domain_lookup_failure_recorded(self) -> None:
        """A failed lookup is recorded and leaves the certificate check intact."""
        lookup = FakeLookup(failures={"example.com"})
        evaluator = ExpiryEvaluator(FakeInspector(), lookup)
        evaluation = asyncio.run(evaluator.evaluate("www.example.com"))
        assert evaluation is not None

        assert evaluation.domain is None
        assert evaluation.domain_failed is True
        assert evaluation.certificate is not None

    def test_invalid_concurrency_rejected(self) -> None:
        """Concurrency must be at least one."""
        with pytest.raises(ValueError, match="max_concurrency"):
            ExpiryEvaluator(FakeInspector(), max_concurrency=0)


class TestExpectedErrors:
    """Tests for classifying certificate failures."""

    @pytest.mark.parametrize(
        "reason",
        [
            "timed out",
            "[Errno 111] Connection refused",
            "[Errno -2] Name or service not known",
            "[SSL: TLSV1_UNRECOGNIZED_NAME] tlsv1 unrecognized name (_ssl.c:1000)",
        ],
    )
    def test_routine_failures_expected(self, reason: str) -> None:
        """Routine network failures are expected."""
        assert is_expected_error(reason) is True

    def test_other_failures_unexpected(self) -> None:
        """Anything else is reported."""
        assert is_expected_error("Certificate parse error: bad DER") is False
