"""Tests for hierarchy walking."""

import pytest

from ancestry_svc.demo import A, C, D, F, H, I, J, K, REGISTRY, print_walk
from ancestry_svc.hierarchy.types import Entity
from ancestry_svc.walker import (
    WalkTrace,
    narrow_instance,
    narrowing,
    walk,
    walk_hierarchy,
)


class Unrelated:
    pass


class TestWalk:

    def test_visits_in_order(self):
        seen = []
        count = walk((A, C, D), D(), lambda entity, instance: seen.append(entity))
        assert seen == [A, C, D]
        assert count == 3

    def test_passes_same_instance_each_step(self):
        instance = K()
        seen = []
        walk((F, H, J, I, K), instance, lambda entity, inst: seen.append(inst))
        assert all(inst is instance for inst in seen)

    def test_empty_sequence_makes_no_visits(self):
        calls = []
        assert walk((), D(), lambda *args: calls.append(args)) == 0
        assert calls == []

    def test_visit_errors_propagate(self):
        def boom(entity, instance):
            raise RuntimeError("visit failed")

        with pytest.raises(RuntimeError):
            walk((A,), A(), boom)


class TestNarrowing:

    def test_native_class_narrows_instance(self):
        instance = D()
        assert narrow_instance(A, instance) is instance
        assert narrow_instance(F, instance) is None

    def test_entity_with_native_type(self):
        entity = Entity(name="C", type_=C)
        instance = D()
        assert narrow_instance(entity, instance) is instance
        assert narrow_instance(Entity(name="F", type_=F), instance) is None

    def test_entity_with_custom_narrow(self):
        entity = Entity(name="dict", narrow=lambda obj: obj if isinstance(obj, dict) else None)
        assert narrow_instance(entity, {"a": 1}) == {"a": 1}
        assert narrow_instance(entity, [1]) is None

    def test_entity_without_type_never_narrows(self):
        assert narrow_instance(Entity(name="A"), A()) is None

    def test_failed_narrowing_skips_step_and_continues(self):
        acted = []
        visit = narrowing(lambda entity, view: acted.append(entity))
        count = walk((A, F, C, D), D(), visit)
        assert acted == [A, C, D]
        assert count == 4


class TestWalkHierarchy:

    def test_resolves_then_walks(self):
        acted = []
        ancestors = walk_hierarchy(REGISTRY, K, K(), narrowing(lambda e, v: acted.append(e)))
        assert ancestors == (F, H, J, I, K)
        assert acted == [F, H, J, I, K]

    def test_absent_query_makes_no_visits(self):
        trace = WalkTrace()
        ancestors = walk_hierarchy(REGISTRY, Unrelated, Unrelated(), trace)
        assert ancestors == ()
        assert trace.steps == []


class TestWalkTrace:

    def test_records_narrowed_and_skipped_steps(self):
        trace = WalkTrace()
        walk((A, F, D), D(), trace)
        assert trace.names == ["A", "F", "D"]
        assert trace.narrowed_names == ["A", "D"]

    def test_action_runs_for_narrowed_steps_only(self):
        acted = []
        trace = WalkTrace(action=lambda entity, view: acted.append(entity.__name__))
        walk((A, F, D), D(), trace)
        assert acted == ["A", "D"]

    def test_entity_names(self):
        trace = WalkTrace()
        walk((Entity(name="C", type_=C), Entity(name="X")), D(), trace)
        assert trace.names == ["C", "X"]
        assert trace.narrowed_names == ["C"]


class TestDemo:

    def test_print_walk_for_d(self):
        lines = []
        ancestors = print_walk(D, emit=lines.append)
        assert ancestors == (A, C, D)
        assert lines == ["base = A", "base = C", "base = D"]

    def test_print_walk_for_k(self):
        lines = []
        print_walk(K, emit=lines.append)
        assert lines == ["base = F", "base = H", "base = J", "base = I", "base = K"]

    def test_main_prints_both_walks(self, capsys):
        from ancestry_svc.demo import main

        main()
        out = capsys.readouterr().out
        assert "base = A" in out
        assert out.index("base = D") < out.index("base = F")
