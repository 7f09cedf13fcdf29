"""
baker: a tiny demo application built with argot.

    $ python main.py bake donut bagel -l -n 2
    $ python main.py recipe
    $ python main.py bake --help

Recipes created interactively by `recipe` are kept in a JSON Bakefile next to
where the program runs; `bake` uses their cook time when it knows the food.
"""
import json
import os.path

from rich.console import Console
from rich.pretty import pprint

from argot import Application, Flag
from argot.prompts import await_input, await_int, await_yes_no
from argot.utils import Unset, coalesce

__prog__ = "baker"


class Bakefile:
    """
    JSON store of recipes: {"items": [{"name": ..., "cookTime": ..., "silently": ...}]}
    """

    def __init__(self, path="Bakefile", /):
        self.path = path

    def recipes(self):
        if not os.path.exists(self.path):
            return []
        with open(self.path, encoding="utf-8") as file:
            return json.load(file).get("items", [])

    def lookup(self, name, /):
        for recipe in self.recipes():
            if recipe.get("name") == name:
                return recipe
        return None

    def add(self, recipe, /):
        recipes = [item for item in self.recipes() if item.get("name") != recipe["name"]]
        recipes.append(recipe)
        with open(self.path, "w", encoding="utf-8") as file:
            json.dump({"items": recipes}, file, indent=2)


def build(bakefile=Unset, /, *, stdout=Unset, stderr=Unset, stream=Unset, shell=True):
    """
    Assemble the baker application.

    The keyword arguments let tests inject consoles and an answer stream.
    """
    bakefile = Bakefile(coalesce(bakefile, "Bakefile"))
    console = coalesce(stdout, Console())

    app = Application(
        "baker",
        version="1.0.0",
        descr="Bake delicious things from the command line",
        shell=shell,
        colorful=True,
        stdout=console,
        stderr=stderr,
    )

    @app.command(
        signature="<food> ...",
        descr="Bake some food",
        options=[Flag("-l", "--loudly", descr="Say it loudly")],
    )
    def bake(food, *, loudly=False, number_of_times="1"):
        for item in food:
            recipe = bakefile.lookup(item) or {}
            message = "baking %s (%d min)" % (item, recipe.get("cookTime", 10))
            if loudly and not recipe.get("silently", False):
                message = message.upper() + "!"
            for _ in range(int(number_of_times)):
                console.print(message)

    @bake.option("-n", "--number-of-times", metavar="times", descr="Bake this many times")
    def number_of_times(value):
        if not value.isdigit() or not int(value):
            raise ValueError("expected a positive number of times, got %r" % value)

    @app.command(descr="Create a recipe interactively")
    def recipe():
        recipe = {
            "name": await_input("Name of your recipe", validator=str.strip, console=console, stream=stream),
            "cookTime": await_int("Cook time", console=console, stream=stream),
            "silently": await_yes_no("Bake silently?", console=console, stream=stream),
        }
        bakefile.add(recipe)
        pprint(recipe, console=console, expand_all=True)

    return app


if __name__ == '__main__':
    build().invoke()
