import csv
import io

SAMPLE = (
    "LastName,FirstName,Campus,Batch\n"
    "Dela Rosa,Nolan,Main Campus,2004\n"
    ",Missing,Main Campus,2004\n"
    "Cruz,Ana,CVC,1800\n"
)


def _read_csv(text):
    return list(csv.DictReader(io.StringIO(text)))


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_transform_drops_invalid_rows(client):
    files = {"file": ("alumni.csv", SAMPLE.encode("utf-8"), "text/csv")}
    r = client.post("/transform", files=files)
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/csv"
    assert r.headers["content-disposition"] == 'attachment; filename="pisay_transformed.csv"'

    assert _read_csv(r.text) == [
        {"last_name": "Dela Rosa", "first_name": "Nolan", "campus": "Main Campus", "batch_year": "2004"},
    ]
    assert r.headers["x-rows-received"] == "3"
    assert r.headers["x-rows-accepted"] == "1"
    assert r.headers["x-rows-dropped"] == "2"


def test_transform_decodes_non_utf8_upload(client):
    # Latin-1 byte forces encoding detection
    raw = "LastName,FirstName,Campus,Batch\nLefebvre,René,Montréal,2001\n".encode("latin-1")

    files = {"file": ("alumni.csv", raw, "text/csv")}
    r = client.post("/transform", files=files)
    assert r.status_code == 200

    rows = _read_csv(r.content.decode("utf-8"))
    assert rows[0]["first_name"] == "René"
    assert rows[0]["campus"] == "Montréal"


def test_transform_strips_utf8_bom(client):
    raw = "LastName,FirstName,Campus,Batch\nSantos,Lea,MAIN,2010\n".encode("utf-8-sig")

    r = client.post("/transform", files={"file": ("alumni.csv", raw, "text/csv")})
    assert r.status_code == 200
    assert len(_read_csv(r.text)) == 1
