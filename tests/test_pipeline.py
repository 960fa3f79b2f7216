"""
Tests for the SearchPipeline.

Runs the real pipeline against the in-memory tree from conftest, so
tier order, ambiguity and root precedence are checked without disk.
"""

import pytest

from ncd.errors import Ambiguous, BoundaryReached, NoMatch, NotFound, NotSet
from ncd.search.pipeline import SearchPipeline
from ncd.search.router import Candidate, Tier
from ncd.services.roots import SearchRoot, Strategy


def _pipeline(fs, env):
    return SearchPipeline(env, fs)


class TestLiteralTier:

    def test_existing_relative_path_short_circuits(self, fake_fs, make_env):
        fake_fs.add(r"C:\Projects\Work")  # would also match via roots
        env = make_env(roots=[r"C:\Projects"])
        assert _pipeline(fake_fs, env).resolve("Project") == r"C:\Work\Project"

    def test_nested_relative_path(self, fake_fs, make_env):
        env = make_env(cwd="C:\\")
        assert _pipeline(fake_fs, env).resolve(r"Projects\Alpha\src") == r"C:\Projects\Alpha\src"

    def test_dot_dot_is_parent(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Work\current")
        assert _pipeline(fake_fs, env).resolve("..") == r"C:\Work"

    def test_drive_anchor_exists(self, fake_fs, make_env):
        assert _pipeline(fake_fs, make_env()).resolve(r"C:\Projects\Beta") == r"C:\Projects\Beta"

    def test_root_relative_uses_cwd_drive(self, fake_fs, make_env):
        assert _pipeline(fake_fs, make_env()).resolve(r"\Projects") == r"C:\Projects"

    def test_anchor_walks_case_insensitively(self, posix_fs, make_env):
        env = make_env(cwd="/srv")
        assert _pipeline(posix_fs, env).resolve("/HOME/me") == "/home/me"

    def test_missing_anchor_is_not_found(self, fake_fs, make_env):
        env = make_env(roots=[r"C:\Projects"])
        with pytest.raises(NotFound):
            _pipeline(fake_fs, env).resolve(r"C:\Nowhere")

    def test_anchored_wildcard_stays_under_anchor(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users")
        assert _pipeline(fake_fs, env).resolve(r"C:\Projects\B*") == r"C:\Projects\Beta"


class TestExactCasing:

    def test_literal_in_other_case_is_rejected(self, fake_fs, make_env):
        with pytest.raises(NoMatch):
            _pipeline(fake_fs, make_env(exact=True)).resolve("project")

    def test_literal_in_disk_case_resolves(self, fake_fs, make_env):
        assert _pipeline(fake_fs, make_env(exact=True)).resolve("Project") == r"C:\Work\Project"

    def test_anchor_in_other_case_is_not_found(self, fake_fs, make_env):
        with pytest.raises(NotFound):
            _pipeline(fake_fs, make_env(exact=True)).resolve(r"C:\projects\beta")

    def test_anchor_in_disk_case_resolves(self, fake_fs, make_env):
        env = make_env(exact=True)
        assert _pipeline(fake_fs, env).resolve(r"C:\Projects\Beta") == r"C:\Projects\Beta"

    def test_ellipsis_tail_in_other_case_is_not_found(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Work\current\deep", exact=True)
        with pytest.raises(NotFound):
            _pipeline(fake_fs, env).resolve(".../project")


class TestEllipsisTier:

    def test_ellipsis_goes_up(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Work\current\deep\deeper")
        assert _pipeline(fake_fs, env).resolve("...") == r"C:\Work\current"

    def test_boundary_does_not_fall_through(self, fake_fs, make_env):
        fake_fs.add(r"C:\Work\.........")
        env = make_env(roots=[r"C:\Work"])
        with pytest.raises(BoundaryReached):
            _pipeline(fake_fs, env).resolve(".........")

    def test_missing_tail_does_not_fall_through(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Work\current\deep", roots=[r"C:\Projects"])
        with pytest.raises(NotFound):
            _pipeline(fake_fs, env).resolve(".../Beta")


class TestCwdTier:

    def test_wildcard_unique_match(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Projects")
        assert _pipeline(fake_fs, env).resolve("alp*") == r"C:\Projects\Alpha"

    def test_wildcard_ambiguous_lists_both(self, fake_fs, make_env):
        with pytest.raises(Ambiguous) as exc:
            _pipeline(fake_fs, make_env()).resolve("pro*")
        assert exc.value.candidates == [r"C:\Work\Project", r"C:\Work\Profile"]
        assert exc.value.where == r"C:\Work"

    def test_wildcard_single_entry(self, fs_factory, make_env):
        fs = fs_factory([r"C:\Work\Project"])
        assert _pipeline(fs, make_env()).resolve("pro*") == r"C:\Work\Project"

    def test_fuzzy_substring(self, fake_fs, make_env):
        with pytest.raises(NoMatch):
            _pipeline(fake_fs, make_env()).resolve("rojec")
        env = make_env(fuzzy=True)
        assert _pipeline(fake_fs, env).resolve("rojec") == r"C:\Work\Project"

    def test_parent_relative_pattern(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Work\current", roots=[r"C:\Projects"])
        with pytest.raises(Ambiguous):
            _pipeline(fake_fs, env).resolve(r"..\pro*")

    def test_cwd_beats_roots(self, fake_fs, make_env):
        fake_fs.add(r"C:\Projects\Other\Beta")
        env = make_env(cwd=r"C:\Projects", roots=[r"C:\Projects\Other"])
        assert _pipeline(fake_fs, env).resolve("bet*") == r"C:\Projects\Beta"


class TestRootTier:

    def test_root_origin(self, fake_fs, make_env):
        env = make_env(roots=[r"C:\Projects"])
        assert _pipeline(fake_fs, env).resolve("alpha") == r"C:\Projects\Alpha"

    def test_root_precedence_first_wins(self, fake_fs, make_env):
        fake_fs.add(r"C:\Users\me\Beta")
        env = make_env(roots=[r"C:\Users\me", r"C:\Projects"])
        candidate = _pipeline(fake_fs, env).resolve("Beta")
        assert candidate == r"C:\Users\me\Beta"

    def test_root_precedence_reversed(self, fake_fs, make_env):
        fake_fs.add(r"C:\Users\me\Beta")
        env = make_env(roots=[r"C:\Projects", r"C:\Users\me"])
        assert _pipeline(fake_fs, env).resolve("Beta") == r"C:\Projects\Beta"

    def test_ambiguous_root_does_not_defer_to_later_root(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users", roots=[r"C:\Work", r"C:\Projects"])
        with pytest.raises(Ambiguous) as exc:
            _pipeline(fake_fs, env).resolve("pro*")
        assert exc.value.where == r"C:\Work"

    def test_target_strategy(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users", roots=[r"C:\Projects\Alpha"], strategy=Strategy.TARGET)
        assert _pipeline(fake_fs, env).resolve("Alpha") == r"C:\Projects\Alpha"

    def test_origin_strategy_rejects_root_name(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users", roots=[r"C:\Projects\Alpha"])
        with pytest.raises(NoMatch):
            _pipeline(fake_fs, env).resolve("Alpha")

    def test_missing_root_is_skipped(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users", roots=[r"C:\Gone", r"C:\Projects"])
        assert _pipeline(fake_fs, env).resolve("beta") == r"C:\Projects\Beta"

    def test_multi_segment_through_root(self, fake_fs, make_env):
        env = make_env(cwd=r"C:\Users", roots=[r"C:\Projects"])
        assert _pipeline(fake_fs, env).resolve("alpha/src") == r"C:\Projects\Alpha\src"

    def test_parallel_keeps_index_order(self, fake_fs, make_env):
        fake_fs.add(r"C:\Users\me\Beta")
        roots = [r"C:\Gone", r"C:\Users\me", r"C:\Projects"]
        env = make_env(cwd=r"C:\Work", roots=roots, parallel_roots=True)
        assert _pipeline(fake_fs, env).resolve("Beta") == r"C:\Users\me\Beta"

    def test_nothing_anywhere(self, fake_fs, make_env):
        env = make_env(roots=[r"C:\Projects"])
        with pytest.raises(NoMatch) as exc:
            _pipeline(fake_fs, env).resolve("zzz")
        assert exc.value.query == "zzz"


class TestSpecialIntents:

    def test_toggle_returns_previous(self, fake_fs, make_env):
        env = make_env(previous_dir=r"C:\Windows")
        assert _pipeline(fake_fs, env).resolve("-") == r"C:\Windows"

    def test_toggle_unset(self, fake_fs, make_env):
        with pytest.raises(NotSet) as exc:
            _pipeline(fake_fs, make_env()).resolve("-")
        assert exc.value.variable == "OLDPWD"

    def test_home(self, fake_fs, make_env):
        env = make_env(home=r"C:\Users\me")
        assert _pipeline(fake_fs, env).resolve("~") == r"C:\Users\me"

    def test_home_unset(self, fake_fs, make_env):
        with pytest.raises(NotSet) as exc:
            _pipeline(fake_fs, make_env()).resolve("~")
        assert exc.value.variable == "USERPROFILE/HOME"

    def test_empty_query(self, fake_fs, make_env):
        with pytest.raises(NoMatch):
            _pipeline(fake_fs, make_env()).resolve("   ")


class TestListMode:

    def test_lists_peers_instead_of_failing(self, fake_fs, make_env):
        results = _pipeline(fake_fs, make_env()).search("pro*")
        assert [c.path for c in results] == [r"C:\Work\Project", r"C:\Work\Profile"]
        assert {c.tier for c in results} == {Tier.CWD}

    def test_lists_across_tiers_and_roots(self, fake_fs, make_env):
        fake_fs.add(r"C:\Users\me\Beta")
        env = make_env(cwd=r"C:\Projects", roots=[r"C:\Users\me", r"C:\Projects"])
        results = _pipeline(fake_fs, env).search("Beta")
        assert results == [
            Candidate(r"C:\Projects\Beta", Tier.LITERAL),
            Candidate(r"C:\Users\me\Beta", Tier.ROOT_SEARCH, r"C:\Users\me"),
        ]

    def test_list_empty_is_no_match(self, fake_fs, make_env):
        with pytest.raises(NoMatch):
            _pipeline(fake_fs, make_env()).search("zzz")


class TestHandlerRegistration:

    def test_handlers_sorted_by_tier(self, fake_fs, make_env):
        pipeline = _pipeline(fake_fs, make_env())
        assert [h.tier for h in pipeline._handlers] == [
            Tier.LITERAL, Tier.ELLIPSIS, Tier.CWD, Tier.ROOT_SEARCH,
        ]

    def test_custom_handler_list(self, fake_fs, make_env):
        from ncd.search.handlers import RootSearchHandler

        env = make_env(roots=[SearchRoot(r"C:\Projects")])
        pipeline = SearchPipeline(env, fake_fs, handlers=[RootSearchHandler()])
        # Without the literal and CWD tiers, "Project" in the CWD is invisible
        with pytest.raises(NoMatch):
            pipeline.resolve("Project")
