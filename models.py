from werkzeug.security import generate_password_hash, check_password_hash
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from datetime import datetime, timezone

# Initialize extensions without app; configured in app.py

db = SQLAlchemy()
migrate = Migrate()


def utc_now():
    """Return current UTC datetime (naive)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


user_roles = db.Table(
    'user_roles',
    db.Column('user_id', db.Integer, db.ForeignKey('user.id'), primary_key=True),
    db.Column('role_id', db.Integer, db.ForeignKey('role.id'), primary_key=True),
)


class Role(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    email_confirmed = db.Column(db.Boolean, nullable=False, default=False)
    password = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), nullable=False, default='')
    last_name = db.Column(db.String(120), nullable=False, default='')
    country = db.Column(db.String(120))
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)

    roles = db.relationship('Role', secondary=user_roles, lazy='selectin')
    listings = db.relationship('Listing', back_populates='user')

    def set_password(self, password: str) -> None:
        self.password = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password, password)

    def has_role(self, name: str) -> bool:
        return any(role.name == name for role in self.roles)


class Category(db.Model):
    # Ids are assigned by the seeder; listings reference them directly.
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(80), nullable=False)
    description = db.Column(db.String(255))

    listings = db.relationship('Listing', back_populates='category')


class Listing(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('category.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    make = db.Column(db.String(80), nullable=False, default='')
    model = db.Column(db.String(80), nullable=False, default='')
    year = db.Column(db.Integer)
    condition = db.Column(db.String(40))
    price = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(3), nullable=False, default='USD')
    listing_type = db.Column(db.String(40))
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)
    image_url = db.Column(db.String(500))

    user = db.relationship('User', back_populates='listings')
    category = db.relationship('Category', back_populates='listings')
