from teabot.main import run

run()
