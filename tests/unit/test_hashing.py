from utils.hashing import verify_password, get_password_hash


def test_password_hashing():
    password = "supersecretpassword"
    hashed = get_password_hash(password)
    assert hashed != password
    assert hashed.startswith("$2b$")

    # Salted: the same input never hashes the same way twice
    assert get_password_hash(password) != hashed


def test_password_verification():
    password = "supersecretpassword"
    hashed = get_password_hash(password)

    assert verify_password(password, hashed) is True
    assert verify_password("wrongpassword", hashed) is False

    long_pass = "a" * 100
    hashed_long = get_password_hash(long_pass)
    assert verify_password(long_pass, hashed_long) is True


def test_verify_rejects_empty_input():
    hashed = get_password_hash("supersecretpassword")

    assert verify_password("", hashed) is False
    assert verify_password("supersecretpassword", "") is False


def test_verify_malformed_hash_returns_false():
    assert verify_password("supersecretpassword", "not-a-bcrypt-hash") is False
    assert verify_password("supersecretpassword", "$2b$04$truncated") is False
