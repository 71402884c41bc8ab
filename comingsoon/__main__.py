from comingsoon.main import run

run()
