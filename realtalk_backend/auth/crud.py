from __future__ import annotations

from typing import Any, Dict, List, Optional

from realtalk_backend.util.slug import slugify
from realtalk_backend.util.time import utcnow_iso


_PUBLIC_USER_FIELDS = (
    "user_id",
    "email",
    "full_name",
    "role",
    "status",
    "email_verified",
    "created_at",
    "last_login_at",
)


def _returning_row(cur: Any) -> Dict[str, Any]:
    # Drain the cursor so SQLite finishes the INSERT ... RETURNING statement
    # before the unit of work commits.
    rows = cur.fetchall()
    return dict(rows[0])


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def public_user(row: Any | Dict[str, Any]) -> Dict[str, Any]:
    """User view safe to return to clients (never includes password_hash)."""
    d = dict(row)
    out = {k: d.get(k) for k in _PUBLIC_USER_FIELDS if k in d}
    if "email_verified" in out:
        out["email_verified"] = bool(out["email_verified"])
    return out


def get_user_by_email(conn: Any, email: str) -> Optional[Any]:
    e = normalize_email(email)
    if not e:
        return None
    return conn.execute(
        "SELECT * FROM users WHERE email=?",
        (e,),
    ).fetchone()


def get_user_by_id(conn: Any, user_id: int) -> Optional[Any]:
    return conn.execute(
        "SELECT * FROM users WHERE user_id=?",
        (int(user_id),),
    ).fetchone()


def insert_user(
    conn: Any,
    *,
    email: str,
    password_hash: str,
    full_name: str,
    role: str = "user",
    status: str = "active",
    email_verified: bool = True,
) -> Dict[str, Any]:
    if role not in ("admin", "user"):
        raise ValueError("invalid_role")

    now = utcnow_iso()
    cur = conn.execute(
        """
        INSERT INTO users (email, password_hash, full_name, role, status, email_verified, created_at, updated_at)
        VALUES (?,?,?,?,?,?,?,?)
        RETURNING *
        """,
        (
            normalize_email(email),
            password_hash,
            full_name,
            role,
            status,
            1 if email_verified else 0,
            now,
            now,
        ),
    )
    return _returning_row(cur)


def insert_organization(
    conn: Any,
    *,
    name: str,
    owner_id: int,
    plan: str = "free",
    status: str = "active",
) -> Dict[str, Any]:
    # Slug collisions are not checked; two orgs may share a slug.
    cur = conn.execute(
        """
        INSERT INTO organizations (name, slug, owner_id, plan, status, created_at)
        VALUES (?,?,?,?,?,?)
        RETURNING organization_id, name, slug, plan, status
        """,
        (name, slugify(name), int(owner_id), plan, status, utcnow_iso()),
    )
    return _returning_row(cur)


def add_member(conn: Any, *, user_id: int, organization_id: int, role: str = "member") -> None:
    conn.execute(
        "INSERT INTO organization_members (user_id, organization_id, role, created_at) VALUES (?,?,?,?)",
        (int(user_id), int(organization_id), role, utcnow_iso()),
    )


def list_memberships(conn: Any, user_id: int) -> List[Dict[str, Any]]:
    rows = conn.execute(
        """
        SELECT o.organization_id, o.name, o.slug, o.plan, o.status, om.role
        FROM organizations o
        JOIN organization_members om ON o.organization_id = om.organization_id
        WHERE om.user_id=?
        ORDER BY o.organization_id
        """,
        (int(user_id),),
    ).fetchall()
    return [dict(r) for r in rows]


def touch_last_login(conn: Any, user_id: int) -> str:
    now = utcnow_iso()
    conn.execute(
        "UPDATE users SET last_login_at=?, updated_at=? WHERE user_id=?",
        (now, now, int(user_id)),
    )
    return now


def set_user_status(conn: Any, user_id: int, status: str) -> None:
    if status not in ("active", "inactive"):
        raise ValueError("invalid_status")
    conn.execute(
        "UPDATE users SET status=?, updated_at=? WHERE user_id=?",
        (status, utcnow_iso(), int(user_id)),
    )
