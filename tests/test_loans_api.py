import pytest

from loan_ledger_api.app.core.security import create_access_token

UNAUTHENTICATED = {
    "status": "error",
    "message": "Unauthenticated. Please log in to access this resource.",
    "data": None,
}

LOAN_FIELDS = {"id", "amount", "interest_rate", "duration_years", "lender_id", "borrower_id"}


def create_loan(client, headers, borrower_id, **overrides):
    payload = {"amount": 5000, "interest_rate": 5, "duration_years": 2, "borrower_id": borrower_id}
    payload.update(overrides)
    return client.post("/api/loans", json=payload, headers=headers)


def test_lending_scenario(client, lender, borrower, headers_for) -> None:
    alice, bob = headers_for(lender.id), headers_for(borrower.id)

    created = create_loan(client, alice, borrower.id)
    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "success"
    assert body["message"] == "Loan created successfully."
    assert body["data"]["lender_id"] == lender.id
    loan_id = body["data"]["id"]

    forbidden = client.patch(f"/api/loans/{loan_id}", json={"amount": 6000}, headers=bob)
    assert forbidden.status_code == 403
    assert forbidden.json() == {
        "status": "error",
        "message": "Unauthorized. Only the original lender can update this loan.",
        "data": None,
    }

    updated = client.patch(f"/api/loans/{loan_id}", json={"amount": 6000}, headers=alice)
    assert updated.status_code == 200
    assert updated.json()["message"] == "Loan updated successfully."
    assert updated.json()["data"]["amount"] == 6000
    assert updated.json()["data"]["duration_years"] == 2

    deleted = client.delete(f"/api/loans/{loan_id}", headers=alice)
    assert deleted.status_code == 200
    assert deleted.json() == {"status": "success", "message": "Loan deleted successfully.", "data": None}

    missing = client.get(f"/api/loans/{loan_id}")
    assert missing.status_code == 404
    assert missing.json() == {"status": "error", "message": "Loan not found.", "data": None}


def test_reads_are_public_and_consistent(client, lender, borrower, headers_for) -> None:
    loan_id = create_loan(client, headers_for(lender.id), borrower.id).json()["data"]["id"]
    create_loan(client, headers_for(borrower.id), lender.id, amount=250)

    listing = client.get("/api/loans")
    single = client.get(f"/api/loans/{loan_id}")

    assert listing.status_code == 200
    assert listing.json()["message"] == "Loans retrieved successfully."
    loans = listing.json()["data"]
    assert len(loans) == 2
    for loan in loans:
        assert LOAN_FIELDS <= set(loan)
    assert single.status_code == 200
    assert single.json()["message"] == "Loan retrieved successfully."
    detail = single.json()["data"]
    assert detail == next(loan for loan in loans if loan["id"] == loan_id)
    assert detail["lender"] == {"id": lender.id, "name": lender.name, "email": lender.email}
    assert detail["borrower"]["id"] == borrower.id
    assert "password" not in detail["lender"]


def test_list_without_loans(client) -> None:
    response = client.get("/api/loans")

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Loans retrieved successfully.", "data": []}


@pytest.mark.parametrize(
    "method, path",
    [("post", "/api/loans"), ("patch", "/api/loans/1"), ("delete", "/api/loans/1")],
)
def test_protected_routes_without_token(client, method, path) -> None:
    response = client.request(method.upper(), path, json={"amount": 1})

    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED


@pytest.mark.parametrize(
    "token",
    [
        "not-a-token",
        create_access_token({"sub": "1"}, expires_delta=-60),
        create_access_token({"sub": "9999"}),
        create_access_token({"sub": "nobody"}),
    ],
)
def test_bad_tokens_get_the_same_401(client, lender, token) -> None:
    response = client.post("/api/loans", json={}, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED


def test_create_validation_failure(client, lender, headers_for) -> None:
    response = client.post("/api/loans", json={"amount": -1, "interest_rate": 5}, headers=headers_for(lender.id))

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation failed. Please check the input fields."
    assert body["data"] == {
        "amount": ["The amount field must be at least 0."],
        "duration_years": ["The duration years field is required."],
        "borrower_id": ["The borrower id field is required."],
    }
    assert client.get("/api/loans").json()["data"] == []


def test_create_self_loan(client, lender, headers_for) -> None:
    response = create_loan(client, headers_for(lender.id), lender.id)

    assert response.status_code == 422
    assert response.json() == {
        "status": "error",
        "message": "The lender and borrower cannot be the same user.",
        "data": None,
    }


def test_create_with_non_object_body(client, lender, headers_for) -> None:
    response = client.post(
        "/api/loans",
        content=b"[1, 2, 3]",
        headers={**headers_for(lender.id), "Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert set(response.json()["data"]) == {"amount", "interest_rate", "duration_years", "borrower_id"}


def test_update_ordering(client, lender, borrower, headers_for) -> None:
    bob = headers_for(borrower.id)

    missing = client.patch("/api/loans/999", json={"amount": -1}, headers=bob)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Loan not found. Unable to update non-existing loan."

    loan_id = create_loan(client, headers_for(lender.id), borrower.id).json()["data"]["id"]
    forbidden = client.patch(f"/api/loans/{loan_id}", json={"amount": -1}, headers=bob)
    assert forbidden.status_code == 403

    invalid = client.patch(f"/api/loans/{loan_id}", json={"amount": -1}, headers=headers_for(lender.id))
    assert invalid.status_code == 422
    assert invalid.json()["data"] == {"amount": ["The amount field must be at least 0."]}


def test_delete_ordering_and_repeat(client, lender, borrower, headers_for) -> None:
    alice = headers_for(lender.id)

    assert client.delete("/api/loans/999", headers=headers_for(borrower.id)).status_code == 404

    loan_id = create_loan(client, alice, borrower.id).json()["data"]["id"]
    forbidden = client.delete(f"/api/loans/{loan_id}", headers=headers_for(borrower.id))
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "Unauthorized. Only the original lender can delete this loan."

    assert client.delete(f"/api/loans/{loan_id}", headers=alice).status_code == 200
    again = client.delete(f"/api/loans/{loan_id}", headers=alice)
    assert again.status_code == 404
    assert again.json()["message"] == "Loan not found. Unable to delete non-existing loan."


def test_non_numeric_loan_id(client) -> None:
    response = client.get("/api/loans/abc")

    assert response.status_code == 422
    assert response.json()["status"] == "error"
    assert response.json()["data"] == {"loan_id": ["The loan id field must be an integer."]}


def test_unknown_route_uses_envelope(client) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Not Found", "data": None}


def test_oversized_loan_id_is_not_found(client, lender, headers_for) -> None:
    alice = headers_for(lender.id)

    fetched = client.get("/api/loans/99999999999999999999")
    assert fetched.status_code == 404
    assert fetched.json() == {"status": "error", "message": "Loan not found.", "data": None}

    assert client.patch("/api/loans/99999999999999999999", json={"amount": 1}, headers=alice).status_code == 404
    assert client.delete("/api/loans/99999999999999999999", headers=alice).status_code == 404


def test_create_with_oversized_integers(client, lender, borrower, headers_for) -> None:
    alice = headers_for(lender.id)

    unknown = create_loan(client, alice, 99999999999999999999)
    assert unknown.status_code == 422
    assert unknown.json()["data"] == {"borrower_id": ["The selected borrower id is invalid."]}

    too_long = create_loan(client, alice, borrower.id, duration_years=10**30)
    assert too_long.status_code == 422
    assert set(too_long.json()["data"]) == {"duration_years"}

    assert client.get("/api/loans").json()["data"] == []


def test_create_rejects_booleans(client, lender, borrower, headers_for) -> None:
    response = create_loan(client, headers_for(lender.id), borrower.id, amount=True, interest_rate=False, duration_years=True)

    assert response.status_code == 422
    assert response.json()["data"] == {
        "amount": ["The amount field must be a number."],
        "interest_rate": ["The interest rate field must be a number."],
        "duration_years": ["The duration years field must be an integer."],
    }
    assert client.get("/api/loans").json()["data"] == []
