from collections.abc import Callable
from typing import Any

import pytest

from srbrowser.schemas.leaderboard import Leaderboard
from srbrowser.schemas.speedrun import LeaderboardRunEntry, UserGameBests

type EntryFactory = Callable[..., LeaderboardRunEntry]


@pytest.fixture
def make_entry() -> EntryFactory:
    def factory(
        run_id: str,
        place: int | None = None,
        date: str | None = None,
        values: dict[str, str] | None = None,
        players: list[dict[str, Any]] | None = None,
        primary_t: float = 100.0,
    ) -> LeaderboardRunEntry:
        return LeaderboardRunEntry.model_validate(
            {
                "place": place,
                "run": {
                    "id": run_id,
                    "date": date,
                    "values": values or {},
                    "players": players or [],
                    "times": {"primary": f"PT{primary_t}S", "primary_t": primary_t},
                },
            }
        )

    return factory


@pytest.fixture
def leaderboard_payload() -> dict[str, Any]:
    """A leaderboard as the middleware serves it."""
    return {
        "weblink": "https://www.speedrun.com/sm64#120_Star",
        "game": "o1y9wo6q",
        "category": "wkpoo02r",
        "level": None,
        "video-only": False,
        "timing": "realtime",
        "runs": [
            {
                "place": 1,
                "run": {
                    "id": "run1",
                    "date": "2021-06-01",
                    "times": {"primary": "PT1H39M", "primary_t": 5940.0},
                    "players": [{"rel": "user", "id": "p1"}],
                    "values": {"var-platform": "n64", "var-emu": "no"},
                },
            },
            {
                "place": 2,
                "run": {
                    "id": "run2",
                    "date": "2020-01-01",
                    "times": {"primary": "PT1H40M", "primary_t": 6000.0},
                    "players": [{"rel": "guest", "name": "SomeGuest"}],
                    "values": {"var-platform": "vc", "var-emu": "no"},
                },
            },
            {
                "place": 3,
                "run": {
                    "id": "run3",
                    "date": None,
                    "times": {"primary": "PT1H41M", "primary_t": 6060.5},
                    "players": [{"rel": "user", "id": "p2"}, {"rel": "user", "id": "p3"}],
                    "values": {"var-platform": "n64"},
                },
            },
        ],
        "players": [
            {"id": "p1", "names": {"international": "Cheese"}},
            {"id": "p2", "names": {"international": "Puncayshun"}},
        ],
    }


@pytest.fixture
def leaderboard(leaderboard_payload: dict[str, Any]) -> Leaderboard:
    return Leaderboard.model_validate(leaderboard_payload)


@pytest.fixture
def game_bests_payload() -> Callable[..., dict[str, Any]]:
    def factory(game_id: str, name: str, categories: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": game_id,
            "names": {"international": name},
            "assets": {
                "cover-large": {"uri": f"https://img.example/{game_id}/cover.png"},
                "trophy-1st": {"uri": f"https://img.example/{game_id}/1st.png"},
                "trophy-2nd": {"uri": f"https://img.example/{game_id}/2nd.png"},
                "trophy-3rd": None,
            },
            "categories": categories,
        }

    return factory


@pytest.fixture
def run_payload() -> Callable[..., dict[str, Any]]:
    def factory(run_id: str, date: str | None, place: int | None = 1) -> dict[str, Any]:
        return {
            "place": place,
            "run": {"id": run_id, "date": date, "times": {"primary_t": 61.5}},
        }

    return factory


@pytest.fixture
def sample_game_bests(game_bests_payload, run_payload) -> UserGameBests:
    """Game with a full-game category C1 and a per-level category C2."""
    return UserGameBests.model_validate(
        game_bests_payload(
            "g1",
            "Game One",
            {
                "c1": {"id": "c1", "name": "C1", "run": run_payload("r-c1", "2020-01-01", 1)},
                "c2": {
                    "id": "c2",
                    "name": "C2",
                    "levels": {
                        "l1": {
                            "id": "l1",
                            "name": "L1",
                            "run": run_payload("r-l1", "2021-06-01", 2),
                        },
                        "l2": {
                            "id": "l2",
                            "name": "L2",
                            "run": run_payload("r-l2", "2019-03-01", 5),
                        },
                    },
                },
            },
        )
    )
