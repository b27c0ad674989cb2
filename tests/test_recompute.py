"""Unit tests for the recompute engine."""

from tip_payroll.orchestrator.recompute import ROLE_ORDER, recompute_affected
from tip_payroll.orchestrator.types import AffectedHint

from tests.conftest import P1, P2, make_cell, make_employee, make_period, make_snapshot


def _cell(snapshot, uid, role_name, period_id=P1):
    return snapshot.find_employee(uid, role_name).by_period.get(period_id)


class TestRecomputeAffected:
    """Test pooled share recomputation."""

    def test_role_order_is_fixed(self):
        """Priority roles are recomputed before pooled roles."""
        assert ROLE_ORDER == ("Host", "Bartender", "Busser", "Server")

    def test_consistent_snapshot_is_noop(self, snapshot):
        """A consistent sheet recomputes to itself."""
        draft = snapshot.draft()
        hint = AffectedHint(
            periods={P1}, employees={"1:10:Server", "1:20:Busser"}, roles={"Server", "Busser"}
        )
        actual = recompute_affected(draft, hint)

        assert draft == snapshot
        assert actual.employees == hint.employees

    def test_pools_read_live_priority_totals(self, snapshot):
        """Servers see the host cc already written into the draft."""
        draft = snapshot.draft()
        _cell(draft, "40", "Host").cc = 3000
        hint = AffectedHint(
            employees={"1:40:Host", "1:10:Server", "1:11:Server", "1:20:Busser"},
            roles={"Host", "Server", "Busser"},
        )
        recompute_affected(draft, hint)

        # cc pool: 10000 + 2000 - 2000 - 3000 = 7000
        assert _cell(draft, "10", "Server").cc == 2800
        assert _cell(draft, "11", "Server").cc == 2800
        assert _cell(draft, "20", "Busser").cc == 1400
        assert _cell(draft, "10", "Server").cash == 1400

    def test_only_hinted_employees_are_rewritten(self, snapshot):
        """With employee keys present, unhinted cells keep their values."""
        draft = snapshot.draft()
        draft.periods[P1].cc_tips = 14000
        recompute_affected(draft, AffectedHint(employees={"1:10:Server"}, roles={"Server"}))

        assert _cell(draft, "10", "Server").cc == 5200
        assert _cell(draft, "11", "Server").cc == 3600

    def test_period_only_fallback_widens_to_whole_roles(self, snapshot):
        """A period with no employee keys recomputes every pooled role in it."""
        draft = snapshot.draft()
        draft.periods[P1].busser_percent = 0.5
        actual = recompute_affected(draft, AffectedHint(periods={P1}))

        # cc pool 9000: busser 50%, servers 50% * 50%
        assert _cell(draft, "20", "Busser").cc == 4500
        assert _cell(draft, "10", "Server").cc == 2250
        assert actual.employees == {"1:10:Server", "1:11:Server", "1:20:Busser"}
        assert actual.periods == {P1}

    def test_fallback_respects_hinted_roles(self, snapshot):
        """The fallback is limited to hinted roles when any are given."""
        draft = snapshot.draft()
        draft.periods[P1].busser_percent = 0.5
        recompute_affected(draft, AffectedHint(periods={P1}, roles={"Busser"}))

        assert _cell(draft, "20", "Busser").cc == 4500
        assert _cell(draft, "10", "Server").cc == 3600

    def test_second_pass_writes_nothing(self, snapshot):
        """Recompute is idempotent."""
        draft = snapshot.draft()
        draft.periods[P1].cc_tips = 20000
        draft.periods[P2].cash_tips = 900
        hint = AffectedHint(periods={P1, P2})

        first = recompute_affected(draft, hint)
        after_first = draft.draft()
        second = recompute_affected(draft, hint)

        assert first.employees
        assert draft == after_first
        assert second.employees == set()

    def test_zero_result_creates_no_cell(self):
        """A pooled employee with no cell and no share stays without a cell."""
        snap = make_snapshot(
            periods=[make_period(P1, cc_tips=0)],
            employees=[make_employee("10", "Server")],
        )
        actual = recompute_affected(snap, AffectedHint(periods={P1}))

        assert snap.employees[0].by_period == {}
        assert actual.employees == set()

    def test_missing_cell_gets_zero_percent_share(self):
        """Without a cell the employee's percent is 0, so nothing is created."""
        snap = make_snapshot(
            periods=[make_period(P1, cc_tips=5000)],
            employees=[make_employee("10", "Server")],
        )
        recompute_affected(snap, AffectedHint(employees={"1:10:Server"}, roles={"Server"}))

        assert snap.employees[0].by_period == {}

    def test_rewrite_keeps_hour_and_percent(self):
        """Only cc and cash are rewritten."""
        snap = make_snapshot(
            periods=[make_period(P1, cc_tips=5000, cash_tips=1000)],
            employees=[
                make_employee("10", "Server", {P1: make_cell(hour=7.5, cc=1, cash=2, percent=1.0)})
            ],
        )
        recompute_affected(snap, AffectedHint(periods={P1}))

        cell = snap.employees[0].by_period[P1]
        assert (cell.hour, cell.percent) == (7.5, 1.0)
        assert (cell.cc, cell.cash) == (5000, 1000)

    def test_priority_totals_exceeding_pool_clamp_to_zero(self):
        """Priority tips larger than the pool leave servers with zero."""
        snap = make_snapshot(
            periods=[make_period(P1, cc_tips=1000)],
            employees=[
                make_employee("30", "Bartender", {P1: make_cell(cc=1500)}),
                make_employee("10", "Server", {P1: make_cell(cc=400, percent=1.0)}),
            ],
        )
        recompute_affected(snap, AffectedHint(periods={P1}))

        assert snap.employees[1].by_period[P1].cc == 0
