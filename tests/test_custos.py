from __future__ import annotations

import json

import pytest

from lucrometro.utils.custos.config import TAX_RATE_DEFAULT
from lucrometro.utils.custos.schema import CostTables
from lucrometro.utils.custos.service import carregar_custos, carregar_custos_arquivo, salvar_custos


def test_missing_file_gives_defaults(tmp_path):
    t = carregar_custos(tmp_path / "nao_existe.yaml")
    assert t.tax_rate == TAX_RATE_DEFAULT == 7.23
    assert t.fixed_per_order == 0.0
    assert dict(t.product_costs) == {}


def test_save_and_load(tmp_path):
    p = tmp_path / "custos.yaml"
    t = CostTables(product_costs={123: 10.5}, shipping_costs={"free-shipping": 12.5}, tax_rate=8, fixed_per_order=1.2)
    salvar_custos(t, p)
    lido = carregar_custos(p)
    assert lido == t
    assert lido.product_cost("123") == 10.5
    assert lido.product_cost(None) == 0.0
    assert lido.shipping_cost("premium-shipping") == 0.0


def test_second_save_keeps_backup(tmp_path):
    p = tmp_path / "custos.yaml"
    salvar_custos(CostTables(tax_rate=5), p)
    salvar_custos(CostTables(tax_rate=6), p)
    assert carregar_custos(p).tax_rate == 6
    assert len(list((tmp_path / "backup").glob("custos_*.yaml"))) == 1


def test_env_override(tmp_path, monkeypatch):
    p = tmp_path / "outro.yaml"
    monkeypatch.setenv("CUSTOS_YAML", str(p))
    salvar_custos(CostTables(fixed_per_order=3))
    assert p.exists()
    assert carregar_custos().fixed_per_order == 3


def test_snapshot_is_immutable_and_clamped():
    t = CostTables(product_costs={"a": -5, "b": "x"}, tax_rate=-1)
    assert dict(t.product_costs) == {"a": 0.0, "b": 0.0}
    assert t.tax_rate == 0.0
    with pytest.raises(TypeError):
        t.product_costs["c"] = 1.0


def test_invalid_file(tmp_path):
    p = tmp_path / "custos.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        carregar_custos(p)


def test_import_from_json(tmp_path):
    src = tmp_path / "custos.json"
    src.write_text(json.dumps({"product_costs": {"1": 4}, "tax_rate": 9.5}), encoding="utf-8")
    t = carregar_custos_arquivo(src)
    assert t.product_cost("1") == 4.0
    assert t.tax_rate == 9.5
    assert t.fixed_per_order == 0.0
