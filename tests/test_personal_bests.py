import datetime

from srbrowser.schemas.speedrun import User, UserCategoryBest, UserGameBests
from srbrowser.services.personal_bests import (
    build_game_section,
    build_personal_bests_view,
    build_player_profile,
    compare_runs_newest_first,
    flatten_category,
)


def test_game_section_flattens_levels_and_sorts_by_date(sample_game_bests):
    section = build_game_section(sample_game_bests)

    assert [row.label for row in section.rows] == ["C2 - L1", "C1", "C2 - L2"]
    assert [row.date for row in section.rows] == [
        datetime.date(2021, 6, 1),
        datetime.date(2020, 1, 1),
        datetime.date(2019, 3, 1),
    ]
    assert section.game_name == "Game One"
    assert section.cover is not None
    assert section.cover.uri == "https://img.example/g1/cover.png"


def test_rows_carry_place_time_and_trophy(sample_game_bests):
    rows = {row.label: row for row in build_game_section(sample_game_bests).rows}

    first = rows["C1"]
    assert first.place == 1
    assert first.place_name == "1st"
    assert first.time == "1m 01s 500ms"
    assert first.trophy is not None
    assert first.trophy.uri == "https://img.example/g1/1st.png"

    assert rows["C2 - L1"].trophy.uri == "https://img.example/g1/2nd.png"


def test_place_outside_podium_gets_no_trophy(sample_game_bests):
    rows = {row.label: row for row in build_game_section(sample_game_bests).rows}

    assert rows["C2 - L2"].place == 5
    assert rows["C2 - L2"].trophy is None


def test_missing_trophy_asset_is_not_an_error(game_bests_payload, run_payload):
    game = UserGameBests.model_validate(
        game_bests_payload("g", "G", {"c": {"name": "C", "run": run_payload("r", None, 3)}})
    )

    (row,) = build_game_section(game).rows

    assert row.place == 3
    assert row.trophy is None


def test_category_without_any_best_emits_no_row():
    category = UserCategoryBest(id="broken", name="Broken", levels={})

    assert flatten_category(category, UserGameBests().assets) == []


def test_malformed_category_does_not_drop_the_game(game_bests_payload, run_payload):
    game = UserGameBests.model_validate(
        game_bests_payload(
            "g",
            "G",
            {
                "ok": {"name": "Any%", "run": run_payload("r", "2020-02-02")},
                "broken": {"name": "Broken"},
            },
        )
    )

    (section,) = build_personal_bests_view({"g": game})

    assert [row.label for row in section.rows] == ["Any%"]


def test_games_ordered_by_newest_run(game_bests_payload, run_payload):
    def single_category_game(game_id: str, date: str) -> UserGameBests:
        categories = {"c": {"name": "Any%", "run": run_payload(f"r{game_id}", date)}}
        return UserGameBests.model_validate(game_bests_payload(game_id, game_id, categories))

    game_a = single_category_game("a", "2022-01-01")
    game_b = single_category_game("b", "2023-01-01")

    sections = build_personal_bests_view({"a": game_a, "b": game_b})

    assert [section.game_id for section in sections] == ["b", "a"]


def test_newest_run_spans_categories_and_levels(sample_game_bests):
    newest = sample_game_bests.get_newest_run()

    assert newest is not None
    assert newest.run.id == "r-l1"


def test_newest_run_is_none_without_dates(game_bests_payload, run_payload):
    game = UserGameBests.model_validate(
        game_bests_payload("g", "G", {"c": {"name": "C", "run": run_payload("r", None)}})
    )

    assert game.get_newest_run() is None


def test_null_dates_never_break_sorting(game_bests_payload, run_payload):
    categories = {
        f"c{i}": {"name": f"C{i}", "run": run_payload(f"r{i}", date)}
        for i, date in enumerate([None, "2021-01-01", None, "2019-01-01", "2020-01-01", None])
    }
    undated_game = UserGameBests.model_validate(
        game_bests_payload("u", "Undated", {"c": {"name": "C", "run": run_payload("ru", None)}})
    )
    game = UserGameBests.model_validate(game_bests_payload("g", "G", categories))

    first = build_personal_bests_view({"g": game, "u": undated_game})
    second = build_personal_bests_view({"g": game, "u": undated_game})

    assert first == second
    assert len(first) == 2
    assert len(next(s for s in first if s.game_id == "g").rows) == 6


def test_comparator_treats_missing_dates_as_equal(make_entry):
    dated = make_entry("a", date="2020-01-01")
    undated = make_entry("b")
    newer = make_entry("c", date="2021-01-01")

    assert compare_runs_newest_first(dated, undated) == 0
    assert compare_runs_newest_first(undated, dated) == 0
    assert compare_runs_newest_first(None, dated) == 0
    assert compare_runs_newest_first(newer, dated) == -1
    assert compare_runs_newest_first(dated, newer) == 1
    assert compare_runs_newest_first(dated, dated) == 0


def test_empty_bests_give_no_sections():
    assert build_personal_bests_view({}) == []
    assert build_personal_bests_view(None) == []


def test_player_profile(sample_game_bests):
    player = User.model_validate(
        {
            "id": "p1",
            "names": {"international": "Cheese"},
            "twitch": {"uri": "https://www.twitch.tv/cheese"},
            "youtube": None,
            "bests": {"g1": sample_game_bests.model_dump()},
        }
    )

    profile = build_player_profile(player)

    assert profile.name == "Cheese"
    assert not profile.is_guest
    assert profile.avatar_url == "https://www.speedrun.com/themes/user/Cheese/image.png"
    assert profile.links.twitch == "https://www.twitch.tv/cheese"
    assert profile.links.youtube is None
    assert [section.game_id for section in profile.bests] == ["g1"]


def test_guest_profile_has_no_avatar_or_bests():
    guest = User.model_validate({"rel": "guest", "name": "Visitor"})

    profile = build_player_profile(guest)

    assert profile.is_guest
    assert profile.name == "Visitor"
    assert profile.avatar_url is None
    assert profile.bests == ()


def test_newest_run_is_looked_up_once_per_game(monkeypatch, game_bests_payload, run_payload):
    games = {
        game_id: UserGameBests.model_validate(
            game_bests_payload(
                game_id, game_id, {"c": {"name": "Any%", "run": run_payload(f"r{game_id}", date)}}
            )
        )
        for game_id, date in [("a", "2020-01-01"), ("b", "2023-01-01"), ("c", "2021-01-01")]
    }
    calls: list[str | None] = []
    get_newest_run = UserGameBests.get_newest_run

    def counting(self: UserGameBests):
        calls.append(self.id)
        return get_newest_run(self)

    monkeypatch.setattr(UserGameBests, "get_newest_run", counting)

    sections = build_personal_bests_view(games)

    assert [section.game_id for section in sections] == ["b", "c", "a"]
    assert sorted(calls) == ["a", "b", "c"]
