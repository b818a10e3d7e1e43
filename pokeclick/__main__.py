"""Entry point for PokéClick."""

from pokeclick.app import PokeClickApp


def main() -> None:
    app = PokeClickApp()
    app.run()


if __name__ == "__main__":
    main()
