"""Testes da validação de datas."""

from datetime import date

from src.application.validation.date_validator import (
    converter_data,
    validar_data_completa,
    validar_data_corte_idade,
    validar_data_nao_futura,
    validar_data_nao_muito_antiga,
    validar_data_no_periodo,
    validar_formato_data,
    validar_logica_datas,
    validar_periodo_letivo,
)


def test_converter_data():
    assert converter_data("15/03/2024") == date(2024, 3, 15)
    assert converter_data("2024-03-15") == date(2024, 3, 15)


def test_formato_data():
    assert validar_formato_data("15/03/2024").formatted == "15/03/2024"
    assert validar_formato_data("2024-03-15").error == "Formato de data inválido. Use DD/MM/YYYY"
    assert validar_formato_data("").valid is False


def test_logica_datas():
    assert validar_logica_datas("01/01/2015", "01/02/2024").valid is True
    assert validar_logica_datas("01/02/2024", "01/01/2015").valid is False


def test_periodo_letivo():
    assert validar_periodo_letivo("01/02/2024", "15/12/2024").valid is True
    assert validar_periodo_letivo("01/02/2024", "01/02/2023").error == "Data de início deve ser anterior à data de fim"
    assert validar_periodo_letivo("01/02/2021", "01/02/2024").error == "Período letivo não pode ser superior a 2 anos"


def test_data_no_periodo():
    resultado = validar_data_no_periodo("10/01/2024", "01/02/2024", "30/06/2024")

    assert resultado.error == "Data (10/01/2024) é anterior ao início do período (01/02/2024)"
    assert validar_data_no_periodo("30/06/2024", "01/02/2024", "30/06/2024").valid is True


def test_data_corte_idade():
    assert validar_data_corte_idade("31/03/2018", 2024).valid is True
    assert "31/03/2024" in validar_data_corte_idade("15/04/2018", 2024).error


def test_data_futura_e_antiga():
    assert validar_data_nao_futura("02/01/2024", hoje=date(2024, 1, 1)).error == "Data não pode ser futura"
    assert validar_data_nao_muito_antiga("31/12/1899").error == "Data muito antiga (antes de 1900)"


def test_data_completa():
    assert validar_data_completa("32/01/2024").valid is False
    assert validar_data_completa("01/01/1899", nao_muito_antiga=True).valid is False
    assert validar_data_completa("01/01/2024", data_minima=date(2024, 2, 1)).error == "Data deve ser posterior a 01/02/2024"
    assert validar_data_completa("01/03/2024", data_maxima=date(2024, 2, 1)).error == "Data deve ser anterior a 01/02/2024"
    assert validar_data_completa("15/03/2024").formatted == "15/03/2024"
