"""HTTP contract tests (status codes and JSON field names)."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.api import admin as admin_api


def _cadastro(client: TestClient, email: str = "ana@exemplo.com", senha: str = "segredo123"):
    return client.post("/cadastro", json={"nome": "Ana", "email": email, "senha": senha})


def _usuario_id(client: TestClient, email: str = "ana@exemplo.com", senha: str = "segredo123") -> int:
    _cadastro(client, email, senha)
    return client.post("/login", json={"email": email, "senha": senha}).json()["user"]["id"]


def _inscricao(usuario_id: int, cpf: str = "11122233344", **extra) -> dict:
    body = {
        "usuario_id": usuario_id,
        "nome_completo": "Ana Souza",
        "cpf": cpf,
        "idade": "",
        "genero": "F",
        "endereco": "Rua A, 10",
        "renda_familiar": "1800.00",
        "numero_membros_familia": "3",
        "despesas_mensais": "",
        "nivel_escolaridade": "Superior",
    }
    body.update(extra)
    return body


class TestHealth:
    def test_root(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text


class TestCadastro:
    def test_created(self, client: TestClient) -> None:
        response = _cadastro(client)
        assert response.status_code == 201
        assert response.json() == {"message": "Usuário criado com sucesso!"}

    def test_duplicate_email(self, client: TestClient) -> None:
        _cadastro(client)
        response = _cadastro(client, email="ANA@exemplo.com")
        assert response.status_code == 409
        assert response.json() == {"error": "Email já cadastrado."}

    def test_denylisted(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRATION_DENYLIST", "spam@exemplo.com")
        response = _cadastro(client, email="spam@exemplo.com")
        assert response.status_code == 403
        assert "error" in response.json()

    def test_missing_field(self, client: TestClient) -> None:
        response = client.post("/cadastro", json={"nome": "", "email": "a@b.com", "senha": "x"})
        assert response.status_code == 422
        assert response.json()["error"] == "Dados inválidos."

    @pytest.mark.parametrize("senha", ["a" * 80, "é" * 37])
    def test_password_over_72_bytes_is_rejected(self, client: TestClient, senha: str) -> None:
        response = _cadastro(client, senha=senha)
        assert response.status_code == 422
        assert response.json()["error"] == "Dados inválidos."

    def test_password_of_72_bytes_is_accepted(self, client: TestClient) -> None:
        assert _cadastro(client, senha="a" * 72).status_code == 201


class TestLogin:
    def test_success_hides_digest(self, client: TestClient) -> None:
        _cadastro(client)
        response = client.post("/login", json={"email": "ana@exemplo.com", "senha": "segredo123"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login realizado!"
        assert body["user"]["email"] == "ana@exemplo.com"
        assert "senha" not in body["user"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client: TestClient) -> None:
        _cadastro(client)
        wrong = client.post("/login", json={"email": "ana@exemplo.com", "senha": "errada"})
        unknown = client.post("/login", json={"email": "nao@existe.com", "senha": "segredo123"})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json() == {"message": "Email ou senha incorretos"}


class TestInscricao:
    def test_create_and_fetch_by_owner(self, client: TestClient) -> None:
        usuario_id = _usuario_id(client)

        created = client.post("/inscricao", json=_inscricao(usuario_id))
        assert created.status_code == 201
        assert created.json()["message"] == "Inscrição realizada!"
        assert isinstance(created.json()["id"], int)

        fetched = client.get(f"/inscricao/usuario/{usuario_id}")
        assert fetched.status_code == 200
        record = fetched.json()
        assert record["id"] == created.json()["id"]
        assert record["idade"] is None
        assert record["despesas_mensais"] is None
        assert record["numero_membros_familia"] == 3
        assert record["status_aprovacao"] is None

    def test_duplicate_cpf(self, client: TestClient) -> None:
        first = _usuario_id(client, "a@exemplo.com")
        second = _usuario_id(client, "b@exemplo.com")
        client.post("/inscricao", json=_inscricao(first, cpf="111"))

        response = client.post("/inscricao", json=_inscricao(second, cpf="111"))

        assert response.status_code == 400
        assert response.json() == {"error": "CPF já cadastrado."}

    @pytest.mark.parametrize(
        "override",
        [{"idade": 10**20}, {"cpf": "1" * 21}, {"renda_familiar": "12345678901.00"}],
    )
    def test_out_of_range_fields_are_rejected(self, client: TestClient, override: dict) -> None:
        usuario_id = _usuario_id(client)

        response = client.post("/inscricao", json=_inscricao(usuario_id, **override))

        assert response.status_code == 422
        assert response.json()["error"] == "Dados inválidos."

    def test_owner_without_enrollment(self, client: TestClient) -> None:
        response = client.get("/inscricao/usuario/999")
        assert response.status_code == 404
        assert "message" in response.json()

    def test_resubmit_forces_under_review(self, client: TestClient) -> None:
        usuario_id = _usuario_id(client)
        inscricao_id = client.post("/inscricao", json=_inscricao(usuario_id, cpf="222")).json()["id"]
        client.put(f"/admin/atualizar/{inscricao_id}", json={"status": "REJEITADO"})

        response = client.put(f"/inscricao/{inscricao_id}", json=_inscricao(usuario_id, cpf="222"))

        assert response.status_code == 200
        assert "message" in response.json()
        record = client.get(f"/inscricao/usuario/{usuario_id}").json()
        assert record["status_aprovacao"] == "EM ANÁLISE"

    def test_resubmit_missing(self, client: TestClient) -> None:
        response = client.put("/inscricao/999", json=_inscricao(1))
        assert response.status_code == 404


class TestAdmin:
    def test_list_with_search_and_email(self, client: TestClient) -> None:
        ana = _usuario_id(client, "ana@exemplo.com")
        bia = _usuario_id(client, "bia@exemplo.com")
        first = client.post("/inscricao", json=_inscricao(ana, cpf="111")).json()["id"]
        client.post("/inscricao", json=_inscricao(bia, cpf="222", nome_completo="Beatriz"))
        client.put(f"/admin/atualizar/{first}", json={"status": "APROVADO"})

        listing = client.get("/admin/inscricoes")
        assert listing.status_code == 200
        assert [row["cpf"] for row in listing.json()] == ["222", "111"]
        assert listing.json()[0]["email"] == "bia@exemplo.com"

        search = client.get("/admin/inscricoes", params={"busca": "beat"})
        assert [row["cpf"] for row in search.json()] == ["222"]

    def test_edit_keeps_status(self, client: TestClient) -> None:
        usuario_id = _usuario_id(client)
        inscricao_id = client.post("/inscricao", json=_inscricao(usuario_id, cpf="333")).json()["id"]
        client.put(f"/admin/atualizar/{inscricao_id}", json={"status": "PENDENTE"})

        response = client.put(
            f"/admin/editar/{inscricao_id}",
            json=_inscricao(usuario_id, cpf="333", nome_completo="Ana Corrigida"),
        )

        assert response.status_code == 200
        record = client.get(f"/inscricao/usuario/{usuario_id}").json()
        assert record["nome_completo"] == "Ana Corrigida"
        assert record["status_aprovacao"] == "PENDENTE"

    def test_update_status(self, client: TestClient) -> None:
        usuario_id = _usuario_id(client)
        inscricao_id = client.post("/inscricao", json=_inscricao(usuario_id)).json()["id"]

        response = client.put(f"/admin/atualizar/{inscricao_id}", json={"status": "aprovado"})

        assert response.status_code == 200
        assert response.json() == {"message": "Status alterado para APROVADO"}

    def test_update_status_unknown_label(self, client: TestClient) -> None:
        usuario_id = _usuario_id(client)
        inscricao_id = client.post("/inscricao", json=_inscricao(usuario_id)).json()["id"]

        response = client.put(f"/admin/atualizar/{inscricao_id}", json={"status": "TALVEZ"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_admin_key_required_when_configured(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ADMIN_API_KEY", "chave-secreta")

        assert client.get("/admin/inscricoes").status_code == 403
        assert client.get("/admin/inscricoes", headers={"X-Admin-Key": "errada"}).status_code == 403
        assert client.get("/admin/inscricoes", headers={"X-Admin-Key": "chave-secreta"}).status_code == 200

    def test_database_error_is_not_leaked(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(session, busca=None):
            raise OperationalError("SELECT * FROM inscricoes", {}, Exception("senha do banco: xyz"))

        monkeypatch.setattr(admin_api, "list_enrollments_for_review", _boom)

        response = client.get("/admin/inscricoes")

        assert response.status_code == 500
        assert response.json() == {"error": "Erro interno do servidor."}
        assert "xyz" not in response.text
