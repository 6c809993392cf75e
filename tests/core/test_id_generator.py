from core.utils.constants import ID_ALPHABET, ID_LENGTH
from core.utils.id_generator import generate_delete_token, generate_id, generate_image_id


def test_alphabet_has_57_unambiguous_characters() -> None:
    assert len(ID_ALPHABET) == 57
    assert len(set(ID_ALPHABET)) == 57
    for confusable in "0O1lI":
        assert confusable not in ID_ALPHABET


def test_ids_have_fixed_length_and_valid_characters() -> None:
    ids = [generate_id() for _ in range(10_000)]

    assert all(len(i) == ID_LENGTH == 10 for i in ids)
    assert all(set(i) <= set(ID_ALPHABET) for i in ids)
    assert len(set(ids)) == len(ids)


def test_custom_length() -> None:
    assert len(generate_id(4)) == 4


def test_image_id_and_delete_token_share_shape() -> None:
    image_id = generate_image_id()
    token = generate_delete_token()

    assert len(image_id) == len(token) == ID_LENGTH
    assert image_id != token
