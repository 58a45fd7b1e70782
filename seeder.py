"""Startup seeding for the marketplace database.

``seed_database`` brings an empty (or partially seeded) database to a usable
state: an ``Admin`` role, an administrator, the fixed category taxonomy, a
test account and a floor of synthetic listings owned by that account.
Every step checks what already exists first, so running it on every start
is safe.  Listings are backfilled by total count only; rows that already
exist are never touched.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from identity import AccountService, PasswordPolicy, RoleService
from models import Category, Listing, User, utc_now
from storage import EntityStore, SchemaService

CATEGORY_CARS = 1
CATEGORY_MOTORCYCLES = 2
CATEGORY_PARTS = 3

CATEGORIES = [
    (CATEGORY_CARS, 'Cars', 'Used cars for sale'),
    (CATEGORY_MOTORCYCLES, 'Motorcycles', 'Used motorcycles for sale'),
    (CATEGORY_PARTS, 'Parts', 'Car and motorcycle parts'),
]

IMAGE_URLS = [
    'https://images.pexels.com/photos/210019/pexels-photo-210019.jpeg',
    'https://images.pexels.com/photos/1402787/pexels-photo-1402787.jpeg',
    'https://images.pexels.com/photos/112460/pexels-photo-112460.jpeg',
    'https://images.pexels.com/photos/2449452/pexels-photo-2449452.jpeg',
    'https://images.pexels.com/photos/799443/pexels-photo-799443.jpeg',
]

CAR_MODELS = [
    ('Toyota', 'Corolla'),
    ('BMW', '3 Series'),
    ('Audi', 'A4'),
    ('Ford', 'Focus'),
    ('Volkswagen', 'Golf'),
]

MOTORCYCLE_MODELS = [
    ('Honda', 'CBR600'),
    ('Yamaha', 'MT-07'),
    ('Kawasaki', 'Ninja 650'),
    ('Suzuki', 'GSX-R750'),
    ('Ducati', 'Monster 821'),
]

PART_NAMES = [
    'Brake Pads',
    'Oil Filter',
    'Spark Plugs',
    'Air Filter',
    'Clutch Kit',
    'Battery',
    'Alternator',
    'Radiator',
    'Fuel Pump',
    'Headlights',
]


@dataclass
class SeedOptions:
    """Identities and targets used by :func:`seed_database`."""

    admin_role: str = 'Admin'
    admin_username: str = 'admin'
    admin_email: str = 'admin@carparts.com'
    admin_password: str = 'Admin@123456'
    test_username: str = 'testuser'
    test_email: str = 'test@carparts.com'
    test_password: str = 'Test@123456'
    test_country: str | None = 'North Macedonia'
    listing_target: int = 30

    @classmethod
    def from_config(cls, config) -> 'SeedOptions':
        defaults = cls()
        return cls(
            admin_role=config.get('SEED_ADMIN_ROLE', defaults.admin_role),
            admin_username=config.get('SEED_ADMIN_USERNAME', defaults.admin_username),
            admin_email=config.get('SEED_ADMIN_EMAIL', defaults.admin_email),
            admin_password=config.get('SEED_ADMIN_PASSWORD', defaults.admin_password),
            test_username=config.get('SEED_TEST_USERNAME', defaults.test_username),
            test_email=config.get('SEED_TEST_EMAIL', defaults.test_email),
            test_password=config.get('SEED_TEST_PASSWORD', defaults.test_password),
            test_country=(config.get('SEED_TEST_COUNTRY', defaults.test_country) or '').strip() or None,
            listing_target=int(config.get('SEED_LISTING_TARGET', defaults.listing_target)),
        )


@dataclass
class SeedReport:
    role_created: bool = False
    admin_created: bool = False
    categories_created: bool = False
    test_user_created: bool = False
    listings_created: int = 0


def category_for_index(i: int) -> int:
    remainder = i % 3
    if remainder == 1:
        return CATEGORY_CARS
    if remainder == 2:
        return CATEGORY_MOTORCYCLES
    return CATEGORY_PARTS


def build_listing(i: int, owner_id: int, image_url: str, created_at=None) -> Listing:
    """Return the synthetic listing for 1-based index ``i``."""
    category_id = category_for_index(i)
    year = 2000 + (i % 25)

    if category_id == CATEGORY_PARTS:
        make = ''
        model = PART_NAMES[(i - 1) % len(PART_NAMES)]
        title = model
        price = 10 + i * 2
    else:
        catalogue = CAR_MODELS if category_id == CATEGORY_CARS else MOTORCYCLE_MODELS
        make, model = catalogue[(i - 1) % len(catalogue)]
        title = f'{make} {model} {year}'
        price = 1000 + i * 150

    return Listing(
        user_id=owner_id,
        category_id=category_id,
        title=title,
        description=f'Auto-generated listing {i}',
        make=make,
        model=model,
        year=year,
        condition='Good',
        price=price,
        currency='USD',
        listing_type='Sale',
        is_active=True,
        created_at=created_at or utc_now(),
        image_url=image_url,
    )


def generate_listings(start: int, stop: int, owner_id: int, rng: random.Random | None = None) -> list[Listing]:
    """Build listings for indices ``start`` through ``stop`` inclusive."""
    rng = rng or random.Random()
    return [
        build_listing(i, owner_id, rng.choice(IMAGE_URLS))
        for i in range(start, stop + 1)
    ]


def _ensure_account(accounts, logger, *, label, username, email, password, first_name, last_name, country=None):
    """Create the account if missing; returns ``(user, created)``."""
    user = accounts.find_by_email(email)
    if user is not None:
        logger.info('%s user already exists', label)
        return user, False

    new_user = User(
        username=username,
        email=email,
        email_confirmed=True,
        first_name=first_name,
        last_name=last_name,
        country=country,
    )
    result = accounts.create_account(new_user, password)
    if not result.succeeded:
        logger.error('Failed to create %s user: %s', label.lower(), result.describe())
        return None, False

    logger.info('%s user created successfully', label)
    return new_user, True


def seed_database(schema, roles, accounts, categories, listings, logger: logging.Logger,
                  options: SeedOptions | None = None, rng: random.Random | None = None) -> SeedReport:
    """Run every seeding step in order and report what was created.

    Account validation failures are logged and skipped.  Storage errors and
    assignment to a missing role propagate to the caller.
    """
    options = options or SeedOptions()
    report = SeedReport()

    schema.ensure_created()

    if not roles.role_exists(options.admin_role):
        report.role_created = roles.create_role(options.admin_role).succeeded

    admin, report.admin_created = _ensure_account(
        accounts,
        logger,
        label='Admin',
        username=options.admin_username,
        email=options.admin_email,
        password=options.admin_password,
        first_name='Admin',
        last_name='User',
    )
    if report.admin_created:
        accounts.add_to_role(admin, options.admin_role)

    if not categories.any():
        categories.add_range(
            Category(id=cid, name=name, description=description)
            for cid, name, description in CATEGORIES
        )
        categories.commit()
        report.categories_created = True

    test_user, report.test_user_created = _ensure_account(
        accounts,
        logger,
        label='Test',
        username=options.test_username,
        email=options.test_email,
        password=options.test_password,
        first_name='Test',
        last_name='User',
        country=options.test_country,
    )
    if report.test_user_created:
        test_user = accounts.find_by_email(options.test_email)

    existing_count = listings.count()
    if existing_count < options.listing_target and test_user is not None:
        new_listings = generate_listings(existing_count + 1, options.listing_target, test_user.id, rng)
        listings.add_range(new_listings)
        listings.commit()
        report.listings_created = len(new_listings)
        logger.info('Seeded %s listings (%s already present)', report.listings_created, existing_count)

    return report


def seed_app(app) -> SeedReport:
    """Seed the database bound to ``app`` using its ``SEED_*`` settings."""
    random_seed = app.config.get('SEED_RANDOM_SEED')
    rng = random.Random(random_seed) if random_seed not in (None, '') else random.Random()

    with app.app_context():
        return seed_database(
            SchemaService(),
            RoleService(),
            AccountService(PasswordPolicy.from_config(app.config)),
            EntityStore(Category),
            EntityStore(Listing),
            app.logger,
            SeedOptions.from_config(app.config),
            rng,
        )
