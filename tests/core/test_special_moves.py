"""Tests for castling, en passant and promotion handling."""

import pytest

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import position_from_fen
from chessrules.core.piece import Piece
from chessrules.core.special_moves import (
    apply_to_board,
    can_castle,
    en_passant_target_after,
    en_passant_victim,
    rights_after,
)
from chessrules.core.types import (
    A1, A8, C1, D1, D3, D4, D5, D6, D7, E1, E2, E4, E5, E8, F1, G1, H1, H4,
)


def _castles(fen: str) -> set[MoveFlag]:
    pos = position_from_fen(fen)
    return {m.flag for m in MoveGenerator(pos).legal_moves() if m.is_castle}


class TestCastlingConditions:
    def test_both_wings_available(self) -> None:
        flags = _castles("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert flags == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}

    def test_rook_on_e8_behind_blocker(self) -> None:
        assert MoveFlag.CASTLE_KINGSIDE in _castles("4r2k/8/8/8/8/8/4P3/4K2R w K - 0 1")

    def test_transit_square_attacked(self) -> None:
        # Bishop h3 covers f1, the square the king crosses.
        assert _castles("4r2k/8/8/8/8/7b/4P3/4K2R w K - 0 1") == set()

    def test_destination_attacked(self) -> None:
        assert _castles("6rk/8/8/8/8/8/4P3/4K2R w K - 0 1") == set()

    def test_king_in_check(self) -> None:
        assert _castles("4r2k/8/8/8/8/8/8/R3K2R w KQ - 0 1") == set()

    def test_queenside_transit_attacked(self) -> None:
        assert _castles("3rk3/8/8/8/8/8/8/R3K2R w KQ - 0 1") == {MoveFlag.CASTLE_KINGSIDE}

    def test_queenside_b_file_attack_is_irrelevant(self) -> None:
        flags = _castles("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert MoveFlag.CASTLE_QUEENSIDE in flags

    def test_blocked_between(self) -> None:
        assert _castles("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1") == set()

    def test_rights_flag_required(self) -> None:
        assert _castles("r3k2r/8/8/8/8/8/8/R3K2R w Qkq - 0 1") == {MoveFlag.CASTLE_QUEENSIDE}

    def test_missing_rook(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w K - 0 1")
        assert not can_castle(
            pos.board, Color.WHITE, pos.castling, MoveFlag.CASTLE_KINGSIDE
        )

    def test_black_castles(self) -> None:
        flags = _castles("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        assert flags == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}


class TestCastlingExecution:
    def test_kingside_relocates_both(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        move = Move(E1, G1, PieceType.KING, flag=MoveFlag.CASTLE_KINGSIDE)
        after = pos.play(move)
        assert after.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert after.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert after.board[E1] is None
        assert after.board[H1] is None
        assert after.castling == CastlingRights.BLACK_BOTH

    def test_queenside_relocates_both(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        move = Move(E1, C1, PieceType.KING, flag=MoveFlag.CASTLE_QUEENSIDE)
        board = apply_to_board(pos.board, move)
        assert board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[A1] is None


class TestCastlingRights:
    def test_king_move_clears_side(self) -> None:
        rights = rights_after(CastlingRights.ALL, Move(E1, E2, PieceType.KING), Color.WHITE)
        assert rights == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_wing(self) -> None:
        rights = rights_after(
            CastlingRights.ALL, Move(H1, H4, PieceType.ROOK), Color.WHITE
        )
        assert rights == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_rook_captured_on_corner(self) -> None:
        move = Move(A1, A8, PieceType.ROOK, PieceType.ROOK)
        rights = rights_after(CastlingRights.ALL, move, Color.WHITE)
        assert rights == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE

    def test_unrelated_move_keeps_rights(self) -> None:
        rights = rights_after(CastlingRights.ALL, Move(E2, E4, PieceType.PAWN), Color.WHITE)
        assert rights == CastlingRights.ALL


class TestEnPassant:
    def test_target_after_double_push(self) -> None:
        move = Move(D7, D5, PieceType.PAWN, flag=MoveFlag.DOUBLE_PAWN)
        assert en_passant_target_after(move) == D6

    def test_no_target_after_single_push(self) -> None:
        assert en_passant_target_after(Move(E4, E5, PieceType.PAWN)) is None

    def test_victim_square(self) -> None:
        assert en_passant_victim(D6, Color.WHITE) == D5
        assert en_passant_victim(D3, Color.BLACK) == D4

    def test_capture_generated_and_applied(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        ep = [m for m in MoveGenerator(pos).legal_moves() if m.is_en_passant]
        assert len(ep) == 1
        after = pos.play(ep[0])
        assert after.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.board[D5] is None
        assert after.board[E5] is None
        assert after.halfmove_clock == 0

    def test_no_capture_without_target(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        assert not any(m.is_en_passant for m in MoveGenerator(pos).legal_moves())

    def test_capture_exposing_king_is_illegal(self) -> None:
        # Both pawns leave rank 5, opening the rook's line to the king.
        pos = position_from_fen("4k3/8/8/K2pP2r/8/8/8/8 w - d6 0 1")
        assert not any(m.is_en_passant for m in MoveGenerator(pos).legal_moves())


class TestPromotion:
    def test_four_kinds_generated(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        promos = {
            m.promotion for m in MoveGenerator(pos).legal_moves() if m.flag == MoveFlag.PROMOTION
        }
        assert promos == {PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}

    def test_no_bare_pawn_move_to_last_rank(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        assert all(
            m.promotion is not None
            for m in MoveGenerator(pos).legal_moves()
            if m.to_sq == E8
        )

    @pytest.mark.parametrize("kind", [PieceType.KNIGHT, PieceType.QUEEN])
    def test_promoted_piece_placed(self, kind: PieceType) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = next(
            m for m in MoveGenerator(pos).legal_moves() if m.promotion == kind
        )
        assert pos.play(move).board[E8] == Piece(Color.WHITE, kind)

    def test_capture_promotion(self) -> None:
        pos = position_from_fen("3r4/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        captures = [m for m in MoveGenerator(pos).legal_moves() if m.captured == PieceType.ROOK]
        assert len(captures) == 4
