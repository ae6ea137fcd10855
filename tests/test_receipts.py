from conftest import IMAGE_BYTES, IMGBB_DELETE, IMGBB_THUMB, IMGBB_URL, encoded_image


def test_create_receipt_for_existing_expense(client, expense):
    response = client.post("/api/receipts", json={
        "url": "https://example.com/recibo.jpg",
        "filename": "recibo.jpg",
        "expenseId": expense["id"]
    })

    assert response.status_code == 201
    body = response.json()
    assert body["url"] == "https://example.com/recibo.jpg"
    assert body["filename"] == "recibo.jpg"
    assert body["expenseId"] == expense["id"]
    assert body["thumbnailUrl"] is None


def test_create_receipt_for_unknown_expense_is_not_persisted(client):
    response = client.post("/api/receipts", json={
        "url": "https://example.com/recibo.jpg",
        "filename": "recibo.jpg",
        "expenseId": 999
    })

    assert response.status_code == 404
    assert response.json() == {"error": "Gasto no encontrado"}
    assert client.get("/api/receipts").json() == []


def test_create_receipt_requires_url(client, expense):
    response = client.post("/api/receipts", json={"filename": "recibo.jpg", "expenseId": expense["id"]})

    assert response.status_code == 400


def test_list_receipts(client, receipt):
    response = client.get("/api/receipts")

    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [receipt["id"]]


def test_list_receipts_by_expense(client, expense, receipt):
    response = client.get(f"/api/receipts/expense/{expense['id']}")

    assert response.status_code == 200
    assert response.json()[0]["filename"] == "recibo.png"


def test_list_receipts_by_expense_without_results_is_404(client):
    response = client.get("/api/receipts/expense/42")

    assert response.status_code == 404
    assert response.json() == {"error": "No se encontraron recibos para este gasto"}


def test_list_receipts_by_expense_can_return_empty_list(make_client):
    client = make_client(receipts_empty_as_not_found=False)

    response = client.get("/api/receipts/expense/42")

    assert response.status_code == 200
    assert response.json() == []


def test_update_receipt_overwrites_supplied_values(client, receipt):
    response = client.put(f"/api/receipts/{receipt['id']}", json={"filename": "factura.png", "url": ""})

    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "factura.png"
    assert body["url"] == receipt["url"]


def test_update_receipt_clears_optional_fields_with_null(client, expense):
    created = client.post("/api/receipts", json={
        "url": IMGBB_URL,
        "filename": "recibo.png",
        "expenseId": expense["id"],
        "thumbnailUrl": IMGBB_THUMB,
        "deleteUrl": IMGBB_DELETE
    }).json()

    response = client.put(f"/api/receipts/{created['id']}", json={"thumbnailUrl": None})

    assert response.status_code == 200
    body = response.json()
    assert body["thumbnailUrl"] is None
    assert body["deleteUrl"] == IMGBB_DELETE


def test_update_unknown_receipt_returns_404(client):
    response = client.put("/api/receipts/999", json={"filename": "x.png"})

    assert response.status_code == 404
    assert response.json() == {"error": "Recibo no encontrado"}


def test_delete_receipt(client, expense, receipt):
    response = client.delete(f"/api/receipts/{receipt['id']}")

    assert response.status_code == 204
    assert client.get("/api/receipts").json() == []
    assert client.get(f"/api/expenses/{expense['id']}").status_code == 200


def test_delete_unknown_receipt_returns_404(client):
    assert client.delete("/api/receipts/999").status_code == 404


def test_upload_creates_receipt_from_host_response(client, expense, fake_host):
    response = client.post(
        "/api/upload",
        files={"file": ("ticket-papeleria.png", IMAGE_BYTES, "image/png")},
        data={"expenseId": str(expense["id"])}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Recibo creado exitosamente"
    receipt = body["data"]["receipt"]
    assert receipt["filename"] == "ticket-papeleria.png"
    assert receipt["url"] == IMGBB_URL
    assert receipt["thumbnailUrl"] == IMGBB_THUMB
    assert receipt["deleteUrl"] == IMGBB_DELETE
    assert receipt["expenseId"] == expense["id"]
    assert body["data"]["imageData"] == {
        "url": IMGBB_URL,
        "delete_url": IMGBB_DELETE,
        "thumbnail": IMGBB_THUMB
    }

    assert len(fake_host.uploads) == 1
    assert fake_host.uploads[0]["key"] == "test-key"
    assert fake_host.uploads[0]["image"] == encoded_image()


def test_upload_without_file_is_rejected(client, expense, fake_host):
    response = client.post("/api/upload", data={"expenseId": str(expense["id"])})

    assert response.status_code == 400
    assert response.json() == {"error": "No se ha proporcionado ningún archivo"}
    assert fake_host.uploads == []


def test_upload_without_expense_id_is_rejected(client, fake_host):
    response = client.post("/api/upload", files={"file": ("r.png", IMAGE_BYTES, "image/png")})

    assert response.status_code == 400
    assert response.json() == {"error": "Se requiere el ID del gasto (expenseId)"}
    assert fake_host.uploads == []


def test_upload_for_unknown_expense_returns_404(client, fake_host):
    response = client.post(
        "/api/upload",
        files={"file": ("r.png", IMAGE_BYTES, "image/png")},
        data={"expenseId": "999"}
    )

    assert response.status_code == 404
    assert fake_host.uploads == []


def test_upload_rejects_non_image_files(client, expense, fake_host):
    response = client.post(
        "/api/upload",
        files={"file": ("notas.txt", b"hola", "text/plain")},
        data={"expenseId": str(expense["id"])}
    )

    assert response.status_code == 400
    assert fake_host.uploads == []


def test_upload_host_failure_returns_500_with_details(client, expense, fake_host):
    fake_host.fail_upload = True

    response = client.post(
        "/api/upload",
        files={"file": ("r.png", IMAGE_BYTES, "image/png")},
        data={"expenseId": str(expense["id"])}
    )

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Error al procesar el recibo"
    assert body["details"] == {"message": "Invalid API v1 key.", "code": 100}
    assert client.get("/api/receipts").json() == []


def test_upload_without_api_key_returns_500(make_client, fake_host):
    client = make_client(imgbb_api_key=None)
    client.post("/api/users", json={"name": "Ana", "email": "ana@espacionova.org", "password": "secreto123"})
    expense = client.post("/api/expenses", json={
        "amount": 10, "description": "Café", "category": "Cocina", "date": "2024-02-01"
    }).json()

    response = client.post(
        "/api/upload",
        files={"file": ("r.png", IMAGE_BYTES, "image/png")},
        data={"expenseId": str(expense["id"])}
    )

    assert response.status_code == 500
    assert response.json()["details"] == "ImgBB no está configurado"
    assert fake_host.uploads == []


def test_download_streams_remote_image_as_attachment(client, receipt):
    response = client.get(f"/api/receipts/{receipt['id']}/download")

    assert response.status_code == 200
    assert response.content == IMAGE_BYTES
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-disposition"] == (
        "attachment; filename=\"recibo.png\"; filename*=UTF-8''recibo.png"
    )


def test_download_unknown_receipt_returns_404(client):
    response = client.get("/api/receipts/999/download")

    assert response.status_code == 404


def test_download_fetch_failure_returns_500(client, expense):
    created = client.post("/api/receipts", json={
        "url": "https://missing.example.com/recibo.png",
        "filename": "recibo.png",
        "expenseId": expense["id"]
    }).json()

    response = client.get(f"/api/receipts/{created['id']}/download")

    assert response.status_code == 500
    assert response.json()["error"] == "Error al descargar el recibo"


def test_download_with_non_ascii_filename_keeps_utf8_name(client, expense):
    created = client.post("/api/receipts", json={
        "url": IMGBB_URL,
        "filename": "收据.png",
        "expenseId": expense["id"]
    }).json()

    response = client.get(f"/api/receipts/{created['id']}/download")

    assert response.status_code == 200
    assert response.content == IMAGE_BYTES
    disposition = response.headers["content-disposition"]
    assert 'filename="recibo.png"' in disposition
    assert "filename*=UTF-8''%E6%94%B6%E6%8D%AE.png" in disposition


def test_download_with_malformed_url_returns_500(client, expense):
    created = client.post("/api/receipts", json={
        "url": "https://[recibo",
        "filename": "recibo.png",
        "expenseId": expense["id"]
    }).json()

    response = client.get(f"/api/receipts/{created['id']}/download")

    assert response.status_code == 500
    assert response.json()["error"] == "Error al descargar el recibo"


def test_upload_with_expense_id_zero_is_looked_up(client, fake_host):
    response = client.post(
        "/api/upload",
        files={"file": ("r.png", IMAGE_BYTES, "image/png")},
        data={"expenseId": "0"}
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Gasto no encontrado"}
    assert fake_host.uploads == []
