#!/usr/bin/env python3
"""Example: Quickstart for access-policy

Declare permissions on a base scope, narrow them in a derived scope, and
decide a few actions for different actors.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install access-policy
"""
from __future__ import annotations

import access_policy as ap


def main() -> None:
    print(f"access-policy version: {ap.__version__}")

    # Step 1: Declare a base scope
    articles = ap.PolicyScope("articles")
    articles.permit("everyone", to=["index", "show"])
    articles.permit("editor", "administrator")
    articles.permit("everyone", to="comment", condition=ap.has_actor)

    # Step 2: Derive a narrower scope
    archive = articles.derive("archive")
    archive.restrict("editor", to=["index", "show"])
    archive.restrict("administrator", from_="destroy")

    # Step 3: Resolve actors from permission sets
    store = ap.PermissionSetStore([
        ap.PermissionSetRecord("editors", ["editor"]),
        ap.PermissionSetRecord("admins", ["administrator"]),
        ap.PermissionSetRecord("root", ["superuser"]),
    ])
    actors = {
        "anonymous": None,
        "edith": store.new_in_roles("edith", "editors").held_permissions(),
        "ada": store.new_in_roles("ada", "admins").held_permissions(),
        "root": store.new_in_roles("root", "root").held_permissions(),
    }

    # Step 4: Decide
    for scope in (articles, archive):
        print(f"\nScope: {scope.name}")
        for action in ("index", "comment", "update", "destroy"):
            for actor_name, held in actors.items():
                result = scope.decide(action, held)
                icon = "ALLOW" if result.allowed else "DENY "
                print(f"  [{icon}] {actor_name:<9} {action:<8} requires {sorted(result.required)}")

    # Step 5: Enforce
    try:
        archive.enforce("destroy", actors["ada"])
    except ap.AccessDeniedError as exc:
        print(f"\nEnforced: {exc}")


if __name__ == "__main__":
    main()
