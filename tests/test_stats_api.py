"""Testes dos endpoints de estatísticas e integridade"""
import pytest
from conftest import API
from app.services.stats_service import match_result, ratio


async def record(client, white_score, black_score, white_ids, black_ids, potm=None, gamelles=None):
    gamelles = gamelles or {}
    players = [
        {
            "playerId": pid,
            "team": pid in white_ids,
            "gamellesScored": gamelles.get(pid, 0),
            "isPlayerOfTheMatch": pid == potm,
        }
        for pid in [*white_ids, *black_ids]
    ]
    response = await client.post(f"{API}/matches/", json={
        "whiteTeamScore": white_score,
        "blackTeamScore": black_score,
        "players": players,
    })
    assert response.status_code == 201
    return response.json()


class TestDerivedFigures:
    """Regras de vitória/derrota e razões"""

    @pytest.mark.parametrize("white, black, team, expected", [
        (10, 5, True, "win"),
        (10, 5, False, "loss"),
        (3, 10, False, "win"),
        (4, 4, True, "draw"),
    ])
    def test_match_result(self, white, black, team, expected):
        assert match_result(white, black, team) == expected

    def test_ratio_without_denominator(self):
        assert ratio(3, 0) == 3.0
        assert ratio(2, 3) == 0.67


class TestLeaderboard:
    """GET /stats/leaderboard"""

    async def test_default_order_by_player_of_the_match(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        c = await make_player("Carol")
        await record(client, 10, 4, [a.id], [b.id], potm=b.id)
        await record(client, 10, 8, [c.id], [b.id], potm=b.id)
        await record(client, 2, 10, [a.id], [c.id], potm=c.id, gamelles={a.id: 3})

        response = await client.get(f"{API}/stats/leaderboard")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data] == ["Bob", "Carol", "Alice"]
        bob = data[0]
        assert bob["playerOfTheMatch"] == 2
        assert (bob["matchesPlayed"], bob["wins"], bob["losses"]) == (2, 0, 2)
        assert bob["winPercentage"] == 0.0

    async def test_sort_by_winrate(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        await record(client, 10, 4, [a.id], [b.id])
        await record(client, 10, 6, [a.id], [b.id])
        await record(client, 5, 10, [a.id], [b.id])

        response = await client.get(f"{API}/stats/leaderboard", params={"sort": "winrate"})

        data = response.json()
        assert [p["name"] for p in data] == ["Alice", "Bob"]
        assert data[0]["winLossRatio"] == 2.0
        assert data[1]["winLossRatio"] == 0.5
        assert data[0]["goalsScored"] == 25
        assert data[0]["goalsConceded"] == 20
        assert data[0]["goalRatio"] == 1.25

    async def test_ascending_direction(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        await record(client, 10, 4, [a.id], [b.id], gamelles={a.id: 4, b.id: 1})

        response = await client.get(
            f"{API}/stats/leaderboard",
            params={"sort": "gamelles", "direction": "asc"},
        )
        assert [p["name"] for p in response.json()] == ["Bob", "Alice"]

    async def test_invalid_sort_field(self, client):
        response = await client.get(f"{API}/stats/leaderboard", params={"sort": "height"})
        assert response.status_code == 400


class TestPlayerStats:
    """GET /stats/players/{id}"""

    async def test_player_sheet(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        await record(client, 10, 4, [a.id], [b.id])
        await record(client, 7, 7, [b.id], [a.id])

        response = await client.get(f"{API}/stats/players/{a.id}")

        assert response.status_code == 200
        data = response.json()
        assert (data["wins"], data["losses"], data["draws"]) == (1, 0, 1)
        assert data["winPercentage"] == 50.0
        assert len(data["recentMatches"]) == 2
        assert {m["result"] for m in data["recentMatches"]} == {"win", "draw"}
        assert {m["playerTeam"] for m in data["recentMatches"]} == {"white", "black"}

    async def test_unknown_player(self, client):
        response = await client.get(f"{API}/stats/players/9999")
        assert response.status_code == 404


class TestMatchStats:
    """GET /stats/matches"""

    async def test_totals_and_recent(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        for _ in range(12):
            await record(client, 10, 1, [a.id], [b.id])

        response = await client.get(f"{API}/stats/matches")

        data = response.json()
        assert data["totalMatches"] == 12
        assert len(data["recentMatches"]) == 10


class TestDataIntegrityAPI:
    """GET /data-integrity/check e POST /data-integrity/repair"""

    async def test_check_and_repair(self, client, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob", own_goals_scored=4)
        await record(client, 10, 4, [a.id], [b.id])

        response = await client.get(f"{API}/data-integrity/check")
        assert response.status_code == 200
        report = response.json()
        assert report["status"] == "issues_found"
        assert report["issues"][0]["playerId"] == b.id
        assert report["issues"][0]["field"] == "ownGoalsScored"

        response = await client.post(f"{API}/data-integrity/repair")
        assert response.json()["repaired"] is True

        response = await client.get(f"{API}/data-integrity/check")
        assert response.json()["status"] == "ok"
