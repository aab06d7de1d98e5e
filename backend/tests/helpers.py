"""Request helpers shared by the API tests."""


def register(client, name="Lee Mujin", email="mujin@example.com", password="28122000"):
    """Create a user through the API and return its JSON."""
    resp = client.post("/users", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["user"]


def login(client, email="mujin@example.com", password="28122000"):
    """Log in and return the issued token."""
    resp = client.post("/users/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def create_book(client, headers, title="Clean Code", author="Robert C. Martin", publisher="Prentice Hall"):
    resp = client.post(
        "/books",
        json={"title": title, "author": author, "publisher": publisher},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["book"]
