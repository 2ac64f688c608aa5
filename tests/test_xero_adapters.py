from cashlens.integrations.xero import adapters


def test_report_tree_keeps_titled_sections_with_rows(xero_profit_and_loss):
    tree = adapters.profit_and_loss_to_tree(xero_profit_and_loss)
    assert [section.title for section in tree] == ["Revenue", "Less Cost of Sales", "Expenses"]


def test_revenue_and_expenses_are_section_sums(xero_profit_and_loss):
    assert adapters.extract_revenue(xero_profit_and_loss) == 38000.0
    assert adapters.extract_expenses(xero_profit_and_loss) == 33700.0


def test_revenue_section_sum_not_first_row():
    payload = {
        "Reports": [
            {
                "Rows": [
                    {
                        "RowType": "Section",
                        "Title": "Revenue",
                        "Rows": [
                            {"Cells": [{"Value": "Sales"}, {"Value": "1000"}]},
                            {"Cells": [{"Value": "Services"}, {"Value": "2000"}]},
                            {"Cells": [{"Value": "Other"}, {"Value": "500"}]},
                        ],
                    }
                ]
            }
        ]
    }
    assert adapters.extract_revenue(payload) == 3500.0


def test_title_match_is_exact():
    payload = {"Reports": [{"Rows": [{"Title": "Revenue ", "Rows": [{"Cells": [{"Value": "x"}, {"Value": "5"}]}]}]}]}
    assert adapters.extract_revenue(payload) == 0.0


def test_section_without_rows_is_skipped_for_later_match():
    payload = {
        "Reports": [
            {
                "Rows": [
                    {"Title": "Expenses"},
                    {"Title": "Expenses", "Rows": [{"Cells": [{"Value": "Rent"}, {"Value": "700"}]}]},
                ]
            }
        ]
    }
    assert adapters.extract_expenses(payload) == 700.0


def test_rows_with_fewer_than_two_cells_are_ignored():
    payload = {
        "Reports": [
            {
                "Rows": [
                    {
                        "Title": "Revenue",
                        "Rows": [
                            {"Cells": [{"Value": "Sales"}]},
                            {"Cells": [{"Value": "Sales"}, {"Value": ""}]},
                            {"Cells": [{"Value": "Sales"}, {"Value": "250.25"}]},
                        ],
                    }
                ]
            }
        ]
    }
    assert adapters.extract_revenue(payload) == 250.25


def test_empty_or_malformed_reports_extract_as_zero():
    for payload in ({}, {"Reports": []}, {"Reports": [{"Rows": "bad"}]}, {"Reports": None}, None):
        assert adapters.extract_revenue(payload) == 0.0
        assert adapters.extract_expenses(payload) == 0.0


def test_bank_accounts_total_sums_every_account(xero_bank_accounts):
    assert adapters.bank_accounts_total(xero_bank_accounts) == 62000.5
    assert adapters.extract_cash_balance(xero_bank_accounts) == 62000.5


def test_bank_accounts_total_skips_unparsable_balances():
    payload = {
        "Accounts": [
            {"BankAccountBalance": "abc"},
            {"Name": "No balance"},
            {"BankAccountBalance": -150.0},
        ]
    }
    assert adapters.bank_accounts_total(payload) == -150.0


def test_missing_account_listing_totals_zero():
    assert adapters.extract_cash_balance({}) == 0.0
    assert adapters.extract_cash_balance({"Accounts": None}) == 0.0
