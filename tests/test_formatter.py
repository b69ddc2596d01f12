import pytest

from movie_finder.services import formatter
from movie_finder.services.models import CatalogEntry, MovieDetail, ProviderOffer, ProviderRef
from payloads import detail_payload


@pytest.fixture
def detail() -> MovieDetail:
    return MovieDetail.from_payload(detail_payload(101))


@pytest.fixture
def netflix() -> ProviderRef:
    return ProviderRef(provider_id=8, provider_name="Netflix", logo_path="/netflix.png")


def test_movie_card_builds_poster_url():
    card = formatter.format_movie_card(
        CatalogEntry(
            id=101,
            title="Dune: Part Two",
            overview="Paul Atreides unites with the Fremen.",
            release_date="2024-02-27",
            poster_path="/dune2.jpg",
        )
    )
    assert card.image == "https://image.tmdb.org/t/p/w500/dune2.jpg"
    assert card.title == "Dune: Part Two"
    assert card.date == "2024-02-27"


def test_movie_card_placeholders():
    card = formatter.format_movie_card(CatalogEntry(id=303))
    assert card.title == "Title"
    assert card.content == "Text Content"
    assert card.date == "Release Date"
    assert card.image is None


def test_movie_details_view(detail):
    view = formatter.format_movie_details(detail, {101: "M"})
    assert view.image == "https://image.tmdb.org/t/p/w500/poster101.jpg"
    assert view.background_img == "https://image.tmdb.org/t/p/w780/backdrop101.jpg"
    assert view.certification == "M"
    assert [(genre.id, genre.category) for genre in view.genres] == [
        (878, "Science Fiction"),
        (12, "Adventure"),
    ]
    assert view.movie_time == 105
    assert view.reviews == 8.0
    assert view.release_status == "Released"
    assert view.tagline == "A tagline."


def test_movie_details_certification_defaults(detail):
    assert formatter.format_movie_details(detail, {}).certification == "NR"


def test_partial_detail_record_still_formats():
    detail = MovieDetail.from_payload({"id": 5})
    view = formatter.format_movie_details(detail, {})
    assert view.genres == []
    assert view.image is None
    assert formatter.extract_categories(view) == []


def test_empty_detail_payload_yields_no_record():
    assert MovieDetail.from_payload({}) is None
    assert MovieDetail.from_payload([]) is None


def test_provider_logo(netflix):
    logo = formatter.format_provider_logo(netflix)
    assert logo.logo == "https://image.tmdb.org/t/p/w500/netflix.png"
    assert logo.id == 8
    assert logo.provider_name == "Netflix"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (8.0, "4.0"),
        (4.5, "4.5"),
        (5, "5.0"),
        (5.0, "5.0"),
        (5.2, "2.6"),
        (6, "3.0"),
        ("7.4", "3.7"),
        (0, "0.0"),
        ("abc", None),
        ("inf", None),
        (None, None),
    ],
)
def test_format_rating(value, expected):
    assert formatter.format_rating(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (105, "1h 45m"),
        (60, "1h 0m"),
        (45, "0h 45m"),
        (0, ""),
        (None, None),
        ("n/a", None),
        ("inf", None),
        (float("-inf"), None),
    ],
)
def test_format_runtime(value, expected):
    assert formatter.format_runtime(value) == expected


def test_extract_categories(detail):
    view = formatter.format_movie_details(detail, {})
    assert formatter.extract_categories(view) == ["Science Fiction", "Adventure"]
    assert formatter.extract_categories(None) == []


def test_group_providers_fallback_message():
    offer = ProviderOffer(id=1)
    assert offer.is_empty
    section = formatter.group_providers(offer)
    assert section.groups == []
    assert section.message == formatter.NO_PROVIDERS_MESSAGE
    assert formatter.group_providers(None).message == formatter.NO_PROVIDERS_MESSAGE


def test_group_providers_single_buy_group(netflix):
    section = formatter.group_providers(ProviderOffer(id=1, buy=[netflix]))
    assert [group.label for group in section.groups] == ["Buy:"]
    assert section.message is None
    assert section.groups[0].providers[0].provider_name == "Netflix"


def test_group_providers_order_and_custom_mapper(netflix):
    seen = []

    def to_logo(ref):
        seen.append(ref.provider_id)
        return formatter.format_provider_logo(ref)

    offer = ProviderOffer(id=1, buy=[netflix], rent=[netflix], flatrate=[netflix])
    section = formatter.group_providers(offer, to_logo)
    assert [group.label for group in section.groups] == ["Rent:", "Buy:", "Watch in:"]
    assert [group.slug for group in section.groups] == ["rent", "buy", "watch-in"]
    assert seen == [8, 8, 8]


def test_formatting_is_idempotent(detail):
    first = formatter.format_movie_details(detail, {101: "M"})
    second = formatter.format_movie_details(detail, {101: "M"})
    assert first == second
    entry = CatalogEntry(id=1, title="A")
    assert formatter.format_movie_card(entry) == formatter.format_movie_card(entry)


def test_truncate_words():
    text = "one two three four five"
    assert formatter.truncate_words(text, 3) == "one two three..."
    assert formatter.truncate_words(text, 5) == text
    assert formatter.truncate_words(text, 0) == text


def test_release_date_helpers():
    assert formatter.format_release_date("2024-02-27") == "27 / 02 / 2024"
    assert formatter.release_year("2024-02-27") == "2024"
    assert formatter.format_release_date(None) is None
    assert formatter.release_year("") is None


def test_movie_modal_combines_facets(detail, netflix):
    modal = formatter.format_movie_modal(detail, {101: "M"}, ProviderOffer(id=101, flatrate=[netflix]))
    assert modal.rating == "4.0"
    assert modal.duration == "1h 45m"
    assert modal.categories == ["Science Fiction", "Adventure"]
    assert modal.year == "2024"
    assert modal.display_date == "27 / 02 / 2024"
    assert [group.label for group in modal.providers.groups] == ["Watch in:"]


@pytest.mark.parametrize(
    ("overrides", "rating", "duration"),
    [
        ({"vote_average": "abc"}, None, "1h 45m"),
        ({"runtime": 105.5}, "4.0", "1h 45.5m"),
        ({"runtime": "n/a", "vote_average": None}, None, None),
    ],
)
def test_movie_modal_tolerates_unparseable_numbers(overrides, rating, duration):
    detail = MovieDetail.from_payload(detail_payload(101, **overrides))
    modal = formatter.format_movie_modal(detail, {}, None)
    assert modal.rating == rating
    assert modal.duration == duration
    assert modal.details.reviews == detail.vote_average
    assert modal.details.movie_time == detail.runtime
