from .timestamps import isoformat


def normalize_user(user):
    # Never expose password_hash
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "isActive": user.is_active,
        "createdAt": isoformat(user.created_at),
    }
