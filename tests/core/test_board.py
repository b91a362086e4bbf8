"""Tests for Square, Piece and Board."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1, A2, A8, B1, C1, D1, E1, E2, E4, E8, F1, G1, H1, H8,
    Square,
)


class TestSquare:
    def test_index(self) -> None:
        assert A1.index == 0
        assert H1.index == 7
        assert A8.index == 56
        assert H8.index == 63

    def test_name_round_trip(self) -> None:
        assert Square.parse("e4") == E4
        assert E4.name == "e4"
        assert str(E4) == "e4"

    def test_from_index(self) -> None:
        assert Square.from_index(28) == E4
        with pytest.raises(ValueError):
            Square.from_index(64)

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44", "E4"])
    def test_parse_rejects(self, name: str) -> None:
        with pytest.raises(ValueError):
            Square.parse(name)

    def test_ordering_is_file_major(self) -> None:
        assert sorted([B1, A8, A1, A2]) == [A1, A2, A8, B1]

    def test_offset(self) -> None:
        assert E2.offset(0, 2) == E4
        assert H1.offset(1, 0) is None
        assert A1.offset(0, -1) is None


class TestPiece:
    def test_fen_letters(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("k") == Piece(Color.BLACK, PieceType.KING)
        assert Piece.from_char("P") == Piece(Color.WHITE, PieceType.PAWN)

    @pytest.mark.parametrize("char", ["x", "", "NN", "1"])
    def test_from_char_rejects(self, char: str) -> None:
        with pytest.raises(ValueError):
            Piece.from_char(char)

    def test_value_semantics(self) -> None:
        assert Piece(Color.WHITE, PieceType.ROOK) == Piece(Color.WHITE, PieceType.ROOK)
        assert len({Piece(Color.WHITE, PieceType.ROOK), Piece(Color.WHITE, PieceType.ROOK)}) == 1


class TestBoardInitial:
    def test_kings(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, kind in expected:
            assert board[sq] == Piece(Color.WHITE, kind), f"Mismatch at square {sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        white = board.pieces(Color.WHITE, PieceType.PAWN)
        black = board.pieces(Color.BLACK, PieceType.PAWN)
        assert len(white) == len(black) == 8
        assert all(sq.rank == 1 for sq in white)
        assert all(sq.rank == 6 for sq in black)

    def test_occupied(self) -> None:
        board = Board.initial()
        assert len(board.occupied(Color.WHITE)) == 16
        assert len(board.occupied(Color.BLACK)) == 16
        assert board.count(Color.BLACK, PieceType.KNIGHT) == 2

    def test_middle_empty(self) -> None:
        board = Board.initial()
        for idx in range(16, 48):
            assert board.is_empty(Square.from_index(idx))


class TestBoardMutation:
    def test_set_and_clear(self) -> None:
        board = Board()
        board[E4] = Piece(Color.WHITE, PieceType.QUEEN)
        assert board[E4] == Piece(Color.WHITE, PieceType.QUEEN)
        assert board.occupied(Color.WHITE) == [E4]
        board[E4] = None
        assert board.is_empty(E4)
        assert board.occupied(Color.WHITE) == []

    def test_replace_updates_indexes(self) -> None:
        board = Board()
        board[E4] = Piece(Color.WHITE, PieceType.QUEEN)
        board[E4] = Piece(Color.BLACK, PieceType.KNIGHT)
        assert board.pieces(Color.WHITE, PieceType.QUEEN) == []
        assert board.pieces(Color.BLACK, PieceType.KNIGHT) == [E4]

    def test_king_square(self) -> None:
        board = Board()
        assert board.king_square(Color.WHITE) is None
        board[G1] = Piece(Color.WHITE, PieceType.KING)
        assert board.king_square(Color.WHITE) == G1

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[E2] = None
        assert board[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert clone != board

    def test_equality(self) -> None:
        assert Board.initial() == Board.initial()
        assert Board() != Board.initial()

    def test_repr(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"
