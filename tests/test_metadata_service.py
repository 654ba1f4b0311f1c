import pytest
from unittest.mock import AsyncMock, MagicMock

from app.core.config import Settings
from app.models.justwatch import JWDetailedMeta, JWSeasonMetaResult
from app.models.media import MediaQuery, MediaType
from app.models.tmdb import (
    TMDBEpisode,
    TMDBExternalIds,
    TMDBMovieData,
    TMDBMovieResult,
    TMDBShowData,
    TMDBShowResult,
)
from app.providers.justwatch import JustWatchClient
from app.providers.tmdb import TMDBClient
from app.services.metadata import MetadataService
from app.services.posters import PosterKeyPool, PosterResolver

PLACEHOLDER = "https://example.com/placeholder.png"


@pytest.fixture
def settings():
    return Settings(
        tmdb_read_api_key="token",
        omdb_image_base="https://img.omdbapi.com/",
        poster_placeholder_url=PLACEHOLDER,
        justwatch_image_base="https://images.justwatch.com",
    )


@pytest.fixture
def service(settings):
    tmdb = MagicMock(spec=TMDBClient)
    justwatch = MagicMock(spec=JustWatchClient)
    posters = PosterResolver(PosterKeyPool(["k1", "k2"]), settings=settings)
    return MetadataService(tmdb, justwatch, posters, settings)


def breaking_bad():
    return TMDBShowData(
        id=1396,
        name="Breaking Bad",
        first_air_date="2008-01-20",
        seasons=[
            {"id": 3573, "season_number": 2, "name": "Season 2"},
            {"id": 3572, "season_number": 1, "name": "Season 1"},
            {"id": 3577, "season_number": 0, "name": "Specials"},
        ],
    )


@pytest.mark.asyncio
async def test_search_movies_resolves_posters_from_details(service):
    service.tmdb.search = AsyncMock(
        return_value=[
            TMDBMovieResult(id=603, title="The Matrix", release_date="1999-03-31"),
            TMDBMovieResult(id=604, title="The Matrix Reloaded", release_date=""),
        ]
    )

    async def details(tmdb_id, media_type):
        imdb = {"603": "tt0133093", "604": None}[tmdb_id]
        return TMDBMovieData(id=int(tmdb_id), title="x", imdb_id=imdb)

    service.tmdb.get_details = AsyncMock(side_effect=details)

    results = await service.search(MediaQuery(search_query="matrix", type=MediaType.MOVIE))

    assert [m.id for m in results] == ["603", "604"]
    assert results[0].poster == "https://img.omdbapi.com/?apikey=k1&i=tt0133093"
    assert results[0].year == "1999"
    assert results[1].poster == PLACEHOLDER
    assert results[1].year is None


@pytest.mark.asyncio
async def test_search_series_skips_detail_calls(service):
    service.tmdb.search = AsyncMock(
        return_value=[TMDBShowResult(id=1396, name="Breaking Bad", first_air_date="2008-01-20")]
    )
    service.tmdb.get_details = AsyncMock()

    results = await service.search(MediaQuery(search_query="breaking", type=MediaType.SERIES))

    assert results[0].type == MediaType.SERIES
    assert results[0].poster == PLACEHOLDER
    service.tmdb.get_details.assert_not_awaited()


@pytest.mark.asyncio
async def test_repeated_search_hits_cache(service):
    service.tmdb.search = AsyncMock(return_value=[])

    await service.search(MediaQuery(search_query="dune", type=MediaType.MOVIE))
    await service.search(MediaQuery(search_query=" dune  ", type=MediaType.MOVIE))
    await service.search(MediaQuery(search_query="dune", type=MediaType.SERIES))

    assert service.tmdb.search.await_count == 2


@pytest.mark.asyncio
async def test_get_meta_from_id_movie(service):
    service.tmdb.get_details = AsyncMock(
        return_value=TMDBMovieData(id=603, title="The Matrix", release_date="1999-03-31")
    )
    service.tmdb.get_external_ids = AsyncMock(
        return_value=TMDBExternalIds(id=603, imdb_id="tt0133093")
    )

    result = await service.get_meta_from_id(MediaType.MOVIE, "603")

    assert result.imdb_id == "tt0133093"
    assert result.tmdb_id == "603"
    assert result.meta.title == "The Matrix"
    assert result.meta.poster.endswith("i=tt0133093")
    assert result.meta.season_data is None


@pytest.mark.asyncio
async def test_get_meta_from_id_absent(service):
    service.tmdb.get_details = AsyncMock(return_value=None)
    service.tmdb.get_external_ids = AsyncMock()

    assert await service.get_meta_from_id(MediaType.MOVIE, "0") is None
    service.tmdb.get_external_ids.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_meta_from_id_series_defaults_to_first_season(service):
    service.tmdb.get_details = AsyncMock(return_value=breaking_bad())
    service.tmdb.get_external_ids = AsyncMock(return_value=TMDBExternalIds(imdb_id="tt0903747"))
    service.tmdb.get_episodes = AsyncMock(
        return_value=[
            TMDBEpisode(id=62086, episode_number=2, name="Cat's in the Bag..."),
            TMDBEpisode(id=62085, episode_number=1, name="Pilot"),
        ]
    )

    result = await service.get_meta_from_id(MediaType.SERIES, "1396")

    service.tmdb.get_episodes.assert_awaited_once_with("1396", 1)
    meta = result.meta
    assert [s.number for s in meta.seasons] == [0, 1, 2]
    assert meta.season_data.id == "3572"
    assert [e.title for e in meta.season_data.episodes] == ["Pilot", "Cat's in the Bag..."]


@pytest.mark.asyncio
async def test_get_meta_from_id_series_selected_season(service):
    service.tmdb.get_details = AsyncMock(return_value=breaking_bad())
    service.tmdb.get_external_ids = AsyncMock(return_value=TMDBExternalIds())
    service.tmdb.get_episodes = AsyncMock(return_value=[])

    result = await service.get_meta_from_id(MediaType.SERIES, "1396", season_id="3573")

    service.tmdb.get_episodes.assert_awaited_once_with("1396", 2)
    assert result.meta.season_data.number == 2
    assert result.meta.poster == PLACEHOLDER


@pytest.mark.asyncio
async def test_get_legacy_meta_for_show(service):
    service.justwatch.get_detailed_meta = AsyncMock(
        return_value=JWDetailedMeta(
            id=55,
            object_type="show",
            title="Dark",
            original_release_year=2017,
            seasons=[{"id": 901, "season_number": 1, "title": "Season 1"}],
            external_ids=[
                {"provider": "imdb", "external_id": "tt5753856"},
                {"provider": "tmdb_latest", "external_id": "70523"},
            ],
        )
    )
    service.justwatch.get_season = AsyncMock(
        return_value=JWSeasonMetaResult(
            id=901,
            season_number=1,
            title="Season 1",
            episodes=[
                {"id": 2, "episode_number": 2, "title": "Lies"},
                {"id": 1, "episode_number": 1, "title": "Secrets"},
            ],
        )
    )

    result = await service.get_legacy_meta_from_id(MediaType.SERIES, "55")

    service.justwatch.get_season.assert_awaited_once_with("901")
    assert result.imdb_id == "tt5753856"
    assert result.tmdb_id == "70523"
    assert result.meta.year == "2017"
    assert [e.number for e in result.meta.season_data.episodes] == [1, 2]


@pytest.mark.asyncio
async def test_get_legacy_meta_absent(service):
    service.justwatch.get_detailed_meta = AsyncMock(return_value=None)

    assert await service.get_legacy_meta_from_id(MediaType.MOVIE, "1") is None


@pytest.mark.asyncio
async def test_movie_and_show_with_same_number_keep_their_own_posters(service):
    service.tmdb.get_details = AsyncMock(return_value=breaking_bad())
    service.tmdb.get_external_ids = AsyncMock(return_value=TMDBExternalIds(imdb_id="tt0903747"))
    service.tmdb.get_episodes = AsyncMock(return_value=[])

    show = await service.get_meta_from_id(MediaType.SERIES, "1396")

    service.tmdb.search = AsyncMock(return_value=[TMDBMovieResult(id=1396, title="Some Movie")])
    service.tmdb.get_details = AsyncMock(
        return_value=TMDBMovieData(id=1396, title="Some Movie", imdb_id="tt9999999")
    )
    movies = await service.search(MediaQuery(search_query="some", type=MediaType.MOVIE))

    assert show.meta.poster.endswith("i=tt0903747")
    assert movies[0].poster == "https://img.omdbapi.com/?apikey=k1&i=tt9999999"
    assert set(service.posters.resolved) == {"tmdb-show-1396", "tmdb-movie-1396"}


@pytest.mark.asyncio
async def test_cached_search_results_are_not_shared(service):
    service.tmdb.search = AsyncMock(
        return_value=[TMDBShowResult(id=1396, name="Breaking Bad")]
    )
    query = MediaQuery(search_query="breaking", type=MediaType.SERIES)

    first = await service.search(query)
    first.clear()
    second = await service.search(query)

    assert [m.id for m in second] == ["1396"]
    service.tmdb.search.assert_awaited_once()
