"""Storefront management CLI.

Usage:
    python src/manage.py setup-db             # Create all tables
    python src/manage.py drop-db              # Drop all tables
    python src/manage.py recompute-ratings    # Rebuild every product's rating from its reviews
    python src/manage.py create-admin --name "Store Admin" --email admin@example.com
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    touched = setup_db(domain)
    print(f"  {touched} provider(s) ready.")
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    touched = drop_db(domain)
    print(f"  {touched} provider(s) dropped.")
    print("Done.")


def recompute_ratings():
    domain = _initialized_domain()

    from storefront.catalogue.product import Product
    from storefront.catalogue.rating import RecomputeRating
    from storefront.utils.repository import fetch_all

    with domain.domain_context():
        products = fetch_all(Product)
        for product in products:
            rating = domain.process(RecomputeRating(product_id=str(product.id)), asynchronous=False)
            print(f"  {product.title}: {rating:.2f}")
        print(f"Recomputed {len(products)} product rating(s).")


def create_admin(name, email):
    domain = _initialized_domain()

    from storefront.errors import StorefrontError
    from storefront.identity.registration import register_admin

    with domain.domain_context():
        try:
            user_id = register_admin(name=name, email=email)
        except StorefrontError as exc:
            print(f"{exc.kind}: {exc.message}", file=sys.stderr)
            sys.exit(1)
    print(f"Admin created: {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("recompute-ratings", help="Recompute every product rating from its reviews")

    admin_parser = subparsers.add_parser("create-admin", help="Register a user with the admin role")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "recompute-ratings":
        recompute_ratings()
    elif args.command == "create-admin":
        create_admin(args.name, args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
