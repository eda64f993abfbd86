from mindvault.chunking.word_chunker import Chunk, chunk_text

from conftest import CharTokenizer, WordTokenizer, words


def test_small_text_is_one_chunk():
    # 50 words at ~5 tokens each stays well under a 1000-token chunk
    tokenizer = WordTokenizer(cost=5)
    text = words(50)

    chunks = chunk_text(text, max_tokens=1000, tokenizer=tokenizer)

    assert len(chunks) == 1
    assert chunks[0].content == text
    assert chunks[0].token_count == 250


def test_splits_when_budget_would_be_exceeded():
    chunks = chunk_text(words(25), max_tokens=10, tokenizer=WordTokenizer())

    assert [c.token_count for c in chunks] == [10, 10, 5]
    assert chunks[0].content == words(10)
    assert chunks[2].content.split() == [f"w{i}" for i in range(20, 25)]


def test_every_chunk_within_budget():
    tokenizer = WordTokenizer(cost=3)
    chunks = chunk_text(words(1000), max_tokens=100, tokenizer=tokenizer)

    assert len(chunks) > 1
    assert all(c.token_count <= 100 for c in chunks)
    for chunk in chunks:
        assert chunk.token_count == len(tokenizer.encode(chunk.content))


def test_chunks_cover_the_text():
    text = "alpha beta\ngamma delta epsilon zeta\neta theta iota kappa lambda"
    chunks = chunk_text(text, max_tokens=3, tokenizer=WordTokenizer())

    assert " ".join(c.content for c in chunks) == text


def test_oversized_word_gets_its_own_chunk():
    chunks = chunk_text("a abcdefghij b", max_tokens=5, tokenizer=CharTokenizer())

    assert [c.content for c in chunks] == ["a", "abcdefghij", "b"]
    assert chunks[1].token_count == 10


def test_oversized_first_word_does_not_emit_empty_chunk():
    chunks = chunk_text("abcdefghij", max_tokens=5, tokenizer=CharTokenizer())

    assert chunks == [Chunk(content="abcdefghij", token_count=10)]


def test_empty_text_has_no_chunks():
    assert chunk_text("", max_tokens=10, tokenizer=WordTokenizer()) == []


def test_chunking_is_deterministic():
    text = words(300)
    first = chunk_text(text, max_tokens=40, tokenizer=WordTokenizer())
    second = chunk_text(text, max_tokens=40, tokenizer=WordTokenizer())

    assert first == second
