from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from subcracker.classical.common import ALPHABET, invert_key, parse_substitution_key, transform
from subcracker.classical.monoalphabetic.hillclimb import AUTO_THREADS, BACKENDS
from subcracker.classical.monoalphabetic.substitution import SubstitutionTransformer
from subcracker.core.ngrams import NgramScorer, count_ngrams, write_ngram_table
from subcracker.core.scoring import get_quadgram_scorer, quadgram_score
from subcracker.core.utils import EnglishNormalizer

app = typer.Typer(help="subcracker CLI: monoalphabetic substitution key recovery by parallel hill climbing.")


def _read_input(text: Optional[str], file: Optional[Path]) -> str:
    if (text is None) == (file is None):
        raise typer.BadParameter("Give either TEXT or --file, not both.")
    if file is not None:
        return file.read_text(encoding="utf-8")
    return text


@app.command()
def crack(
    text: Optional[str] = typer.Argument(None, help="Ciphertext (or use --file)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read ciphertext from a file."),
    seed: int = typer.Option(0, "--seed", "-s"),
    trials: int = typer.Option(20, "--trials", "-t", help="Total random restarts across all workers."),
    swaps: int = typer.Option(2000, "--swaps", help="Swap proposals per restart."),
    threads: int = typer.Option(AUTO_THREADS, "--threads", "-j", help="Worker count; -1 uses every CPU."),
    backend: str = typer.Option("thread", "--backend", help=f"One of: {', '.join(BACKENDS)}."),
    ngrams: Optional[Path] = typer.Option(
        None, "--ngrams", exists=True, dir_okay=False, help="Frequency table ('<ngram> <weight>' lines)."
    ),
    n: int = typer.Option(4, "--n", help="N-gram length of the --ngrams table."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print search progress to stderr."),
):
    """Recover the key from ciphertext alone and print the decryption."""
    ciphertext = _read_input(text, file)
    try:
        scorer = NgramScorer.from_file(ngrams, n) if ngrams is not None else get_quadgram_scorer()
        cracker = SubstitutionTransformer(
            EnglishNormalizer(), scorer, ALPHABET, threads, backend=backend, verbose=verbose
        )
        cracker.fit(ciphertext, seed=seed, num_trials=trials, num_swaps=swaps)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    result = cracker.last_result
    shown_score = f"{result.score:.2f}" if result is not None else "n/a"
    typer.echo(f"decryption_key={cracker.decryption_key}  encryption_key={cracker.encryption_key}  score={shown_score}")
    if verbose and result is not None:
        typer.echo(f"    meta: {result.to_dict()}")
    typer.echo("-" * 60)
    typer.echo(cracker.transform(ciphertext))


@app.command()
def decrypt(
    key: str = typer.Option(..., "--key", "-k", help="Key as a 26-letter permutation or 'a:e,b:t,...' pairs."),
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
):
    """Decrypt when you already have the key (maps alphabet[i] -> key[i])."""
    try:
        k = parse_substitution_key(key)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(transform(text, ALPHABET, k))


@app.command()
def encrypt(
    key: str = typer.Option(..., "--key", "-k", help="The decryption key; its inverse is applied."),
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
):
    """Encrypt with the inverse of a decryption key."""
    try:
        k = invert_key(parse_substitution_key(key), ALPHABET)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(transform(text, ALPHABET, k))


@app.command()
def train(
    corpus: Path = typer.Argument(..., exists=True, dir_okay=False, help="Plain English text."),
    out: Path = typer.Argument(..., dir_okay=False, help="Where to write the table."),
    n: int = typer.Option(4, "--n", help="N-gram length."),
):
    """Count n-grams of a corpus and write a frequency table."""
    try:
        table = count_ngrams(corpus.read_text(encoding="utf-8"), n)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if not table:
        raise typer.BadParameter(f"Corpus has fewer than {n} letters.")
    write_ngram_table(table, out)
    typer.echo(f"wrote {len(table)} {n}-grams to {out}")


@app.command()
def normalize(text: str):
    """Show the letters-only lowercase form used for scoring."""
    typer.echo(EnglishNormalizer()(text))


@app.command()
def score(text: str):
    """Quadgram log score of the normalized text (higher is more English-like)."""
    typer.echo(f"{quadgram_score(EnglishNormalizer()(text)):.2f}")


def main():
    app()


if __name__ == "__main__":
    main()
