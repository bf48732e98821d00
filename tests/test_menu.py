import asyncio

from teabot import menu
from teabot.menu import AppContext, run_menu
from conftest import make_console, make_wallet


def make_ctx(*answers, wallets=2):
    console, reader = make_console(*answers)
    return AppContext([make_wallet(i + 1) for i in range(wallets)], console), reader


def test_out_of_range_option_redraws_menu_only(capsys):
    ctx, reader = make_ctx('7', '6')
    assert asyncio.run(run_menu(ctx)) == 0

    out = capsys.readouterr().out
    assert 'Invalid option' in out
    assert out.count('MAIN MENU') == 2
    assert all(w.w3.eth.calls == [] for w in ctx.wallets)


def test_exit_option(capsys):
    ctx, _ = make_ctx('6')
    assert asyncio.run(run_menu(ctx)) == 0
    assert 'Thank you for using TEA BOT!' in capsys.readouterr().out


def test_end_of_input_at_menu(capsys):
    ctx, _ = make_ctx()
    assert asyncio.run(run_menu(ctx)) == 0
    assert 'Thank you for using TEA BOT!' in capsys.readouterr().out


def test_end_of_input_inside_handler():
    ctx, _ = make_ctx('2', '1')
    assert asyncio.run(run_menu(ctx)) == 0
    assert all(w.w3.eth.sent == [] for w in ctx.wallets)


def test_stake_prompts_once_and_runs_every_wallet():
    ctx, reader = make_ctx('2', 'abc', '1.5', 'y', 'n', '', '6')
    assert asyncio.run(run_menu(ctx)) == 0

    first, second = ctx.wallets
    assert len(first.w3.eth.sent) == 1
    assert second.w3.eth.sent == []
    amount_prompts = [p for p in reader.prompts if 'amount of TEA to stake' in p]
    assert len(amount_prompts) == 2


def test_handler_returns_to_dashboard(capsys):
    cleared = []
    ctx, _ = make_ctx('3', 'y', 'y', '', '6')
    ctx.console.clear = lambda: cleared.append(True)
    assert asyncio.run(run_menu(ctx)) == 0

    assert all(len(w.w3.eth.sent) == 1 for w in ctx.wallets)
    assert cleared == [True]
    out = capsys.readouterr().out
    assert 'TEA SEPOLIA AUTO BOT' in out
    assert 'WALLET 2 INFORMATION' in out


def test_batch_handler_shares_parameters(monkeypatch):
    seen = []

    async def fake_batch(wallet, amount, count, console):
        seen.append((wallet.index, str(amount), count))

    monkeypatch.setattr(menu.batch, 'execute_random_transfers', fake_batch)
    ctx, reader = make_ctx('1', '0.01', 'x', '3', '', '6', wallets=3)
    assert asyncio.run(run_menu(ctx)) == 0
    assert seen == [(1, '0.01', 3), (2, '0.01', 3), (3, '0.01', 3)]


def test_daily_task_handler_runs_every_wallet(monkeypatch):
    seen = []

    async def fake_daily(wallet, console):
        seen.append(wallet.index)

    monkeypatch.setattr(menu.batch, 'execute_daily_task', fake_daily)
    ctx, _ = make_ctx('5', '', '6')
    assert asyncio.run(run_menu(ctx)) == 0
    assert seen == [1, 2]


def test_too_many_invalid_amounts_returns_to_menu():
    ctx, _ = make_ctx('4', 'a', 'b', 'c', 'd', 'e', '', '6')
    assert asyncio.run(run_menu(ctx)) == 0
    assert all(w.w3.eth.sent == [] for w in ctx.wallets)


def test_non_ascii_count_reprompts(monkeypatch):
    seen = []

    async def fake_batch(wallet, amount, count, console):
        seen.append(count)

    monkeypatch.setattr(menu.batch, 'execute_random_transfers', fake_batch)
    ctx, _ = make_ctx('1', '0.01', '²', '2', '', '6', wallets=1)
    assert asyncio.run(run_menu(ctx)) == 0
    assert seen == [2]


def test_close_disconnects_every_wallet():
    ctx, _ = make_ctx(wallets=3)
    asyncio.run(ctx.close())
    assert [w.w3.provider.disconnected for w in ctx.wallets] == [1, 1, 1]
