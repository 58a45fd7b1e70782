import os
import random
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from seeder import (
    CATEGORY_CARS,
    CATEGORY_MOTORCYCLES,
    CATEGORY_PARTS,
    IMAGE_URLS,
    build_listing,
    category_for_index,
    generate_listings,
)


def test_category_cycles_by_index():
    for i in range(1, 31):
        expected = {1: CATEGORY_CARS, 2: CATEGORY_MOTORCYCLES, 0: CATEGORY_PARTS}[i % 3]
        assert category_for_index(i) == expected


def test_parts_have_no_make_and_low_price():
    for listing, i in zip(generate_listings(1, 30, owner_id=1), range(1, 31)):
        if listing.category_id != CATEGORY_PARTS:
            continue
        assert listing.make == ''
        assert listing.price == 10 + 2 * i
        assert listing.title == listing.model


def test_vehicles_priced_by_index_and_year_in_range():
    for listing, i in zip(generate_listings(1, 30, owner_id=1), range(1, 31)):
        if listing.category_id == CATEGORY_PARTS:
            continue
        assert listing.price == 1000 + 150 * i
        assert 2000 <= listing.year <= 2024


def test_vehicle_title_uses_make_model_and_year():
    car = build_listing(1, owner_id=5, image_url=IMAGE_URLS[0])
    assert car.category_id == CATEGORY_CARS
    assert (car.make, car.model, car.year) == ('Toyota', 'Corolla', 2001)
    assert car.title == 'Toyota Corolla 2001'

    moto = build_listing(2, owner_id=5, image_url=IMAGE_URLS[0])
    assert moto.category_id == CATEGORY_MOTORCYCLES
    assert moto.title == 'Yamaha MT-07 2002'


def test_part_names_cycle_every_ten():
    assert build_listing(3, 1, IMAGE_URLS[0]).model == 'Spark Plugs'
    assert build_listing(12, 1, IMAGE_URLS[0]).model == 'Oil Filter'
    assert build_listing(30, 1, IMAGE_URLS[0]).model == 'Headlights'


def test_fixed_fields():
    listing = build_listing(7, owner_id=42, image_url=IMAGE_URLS[2])
    assert listing.user_id == 42
    assert listing.description == 'Auto-generated listing 7'
    assert listing.condition == 'Good'
    assert listing.currency == 'USD'
    assert listing.listing_type == 'Sale'
    assert listing.is_active is True
    assert listing.created_at is not None
    assert listing.image_url == IMAGE_URLS[2]


def test_generate_listings_covers_inclusive_range():
    listings = generate_listings(26, 30, owner_id=1)
    assert [l.description for l in listings] == [f'Auto-generated listing {i}' for i in range(26, 31)]
    assert generate_listings(31, 30, owner_id=1) == []


def test_image_choice_is_reproducible_with_seeded_rng():
    first = [l.image_url for l in generate_listings(1, 30, 1, random.Random(7))]
    second = [l.image_url for l in generate_listings(1, 30, 1, random.Random(7))]
    assert first == second
    assert set(first) <= set(IMAGE_URLS)
