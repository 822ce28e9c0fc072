import math
import os
from pathlib import Path
from typing import ClassVar, Sequence

import torch
from torch.nn import functional as F

from pokerai.constants import HAND_SIZE, NUM_CARDS

LUT5_SIZE = math.comb(NUM_CARDS, 5)
BUILD_CHUNK = 131_072


class TensorLUTHandEvaluator:
    """
    Lookup-table hand evaluator.

    - Builds a 5-card lookup table indexed by combinadic rank C(52,5).
    - Evaluates 7-card hold'em hands by taking max score across 21 five-card subsets.
    - Keeps LUT and gather operations on the active torch device.

    Building the table takes a while; construct one evaluator up front and
    share it, or persist the table with `save_table` and reload it with
    `from_table_file`.
    """

    _cpu_lut5: ClassVar[torch.Tensor | None] = None
    _device_cache: ClassVar[dict[str, tuple[torch.Tensor, torch.Tensor, torch.Tensor]]] = {}

    def __init__(self, *, device: torch.device | str = "cpu", lut5: torch.Tensor | None = None) -> None:
        self.device = torch.device(device)
        key = str(self.device)

        if lut5 is not None:
            if lut5.shape != (LUT5_SIZE,):
                raise ValueError(f"lut5 must have shape ({LUT5_SIZE},)")
            self._lut5 = lut5.to(self.device, dtype=torch.int32)
            self._choose5 = torch.combinations(torch.arange(HAND_SIZE, dtype=torch.long), r=5).to(self.device)
            self._binom = _build_binom_table(device=self.device)
            return

        if TensorLUTHandEvaluator._cpu_lut5 is None:
            TensorLUTHandEvaluator._cpu_lut5 = _build_lut5_cpu()

        if key not in TensorLUTHandEvaluator._device_cache:
            lut5 = TensorLUTHandEvaluator._cpu_lut5.to(self.device, non_blocking=True)
            choose5 = torch.combinations(torch.arange(HAND_SIZE, dtype=torch.long), r=5).to(self.device)
            binom = _build_binom_table(device=self.device)
            TensorLUTHandEvaluator._device_cache[key] = (lut5, choose5, binom)

        self._lut5, self._choose5, self._binom = TensorLUTHandEvaluator._device_cache[key]

    @classmethod
    def from_table_file(cls, path: str | Path, *, device: torch.device | str = "cpu") -> "TensorLUTHandEvaluator":
        src = Path(path)
        if not src.exists():
            raise FileNotFoundError(f"Hand rank table not found: {src}")
        return cls(device=device, lut5=torch.load(src, map_location="cpu"))

    def save_table(self, path: str | Path) -> Path:
        dst = Path(path)
        dst.parent.mkdir(parents=True, exist_ok=True)
        tmp = dst.with_name(f".{dst.name}.tmp")

        torch.save(self._lut5.cpu(), tmp)
        os.replace(tmp, dst)
        return dst

    def score(self, cards: Sequence[int]) -> int:
        """Score one 7-card hand; raises ValueError on a malformed card set."""
        if len(cards) != HAND_SIZE:
            raise ValueError(f"Expected {HAND_SIZE} cards, got {len(cards)}")
        if len(set(cards)) != HAND_SIZE:
            raise ValueError(f"Duplicate cards in hand: {list(cards)}")
        if any(not (0 <= c < NUM_CARDS) for c in cards):
            raise ValueError(f"Card index out of range in hand: {list(cards)}")

        hand = torch.tensor([list(cards)], dtype=torch.long, device=self.device)
        return int(self.score_7card(hand)[0].item())

    def score_7card(self, cards7: torch.Tensor) -> torch.Tensor:
        """Return exact hand strength score for each 7-card hand, larger is better."""
        if cards7.ndim != 2 or cards7.shape[1] != HAND_SIZE:
            raise ValueError("cards7 must have shape [B, 7]")

        cards7 = cards7.to(self.device, dtype=torch.long)
        subsets = cards7[:, self._choose5]  # [B, 21, 5]
        subsets = torch.sort(subsets, dim=-1).values

        idx = _combinadic_rank_5(subsets.reshape(-1, 5), self._binom)
        scores = self._lut5[idx].view(cards7.shape[0], -1)
        return scores.max(dim=1).values


def _build_lut5_cpu() -> torch.Tensor:
    deck = torch.arange(NUM_CARDS, dtype=torch.long)
    combos = torch.combinations(deck, r=5)  # [2,598,960, 5]
    binom = _build_binom_table(device=torch.device("cpu"))

    lut = torch.empty((LUT5_SIZE,), dtype=torch.int32)
    for start in range(0, combos.shape[0], BUILD_CHUNK):
        chunk = combos[start : start + BUILD_CHUNK]
        lut[_combinadic_rank_5(chunk, binom)] = _score_five_card_hands(chunk)
    return lut


def _build_binom_table(*, device: torch.device) -> torch.Tensor:
    table = torch.zeros((NUM_CARDS + 1, 6), dtype=torch.long, device=device)
    for n in range(NUM_CARDS + 1):
        table[n, 0] = 1
        for k in range(1, min(5, n) + 1):
            table[n, k] = math.comb(n, k)
    return table


def _combinadic_rank_5(cards5: torch.Tensor, binom: torch.Tensor) -> torch.Tensor:
    cards5 = cards5.to(dtype=torch.long)
    if cards5.ndim != 2 or cards5.shape[1] != 5:
        raise ValueError("cards5 must have shape [N, 5]")

    return (
        binom[cards5[:, 0], 1]
        + binom[cards5[:, 1], 2]
        + binom[cards5[:, 2], 3]
        + binom[cards5[:, 3], 4]
        + binom[cards5[:, 4], 5]
    )


def _score_five_card_hands(cards5: torch.Tensor) -> torch.Tensor:
    """Exact 5-card high-hand ordering score. Higher is stronger."""
    cards5 = cards5.to(dtype=torch.long)
    ranks = cards5 // 4
    suits = cards5 % 4

    n = cards5.shape[0]
    rank_counts = F.one_hot(ranks, num_classes=13).sum(dim=1)
    rank_faces = torch.arange(2, 15, dtype=torch.long).unsqueeze(0).expand(n, -1)

    is_flush = (suits == suits[:, :1]).all(dim=1)
    straight_high = _straight_high(rank_counts > 0)
    is_straight = straight_high > 0

    pair_mask = rank_counts == 2
    trip_mask = rank_counts == 3
    quad_mask = rank_counts == 4
    single_mask = rank_counts == 1

    pair_count = pair_mask.sum(dim=1)
    has_trip = trip_mask.any(dim=1)

    is_straight_flush = is_straight & is_flush
    is_four = quad_mask.any(dim=1)
    is_full_house = has_trip & (pair_count == 1)
    is_three = has_trip & ~is_full_house
    is_two_pair = pair_count == 2
    is_pair = (pair_count == 1) & ~has_trip
    flush_only = is_flush & ~is_straight_flush
    straight_only = is_straight & ~is_straight_flush
    is_high = ~(is_straight_flush | is_four | is_full_house | is_flush | is_straight | is_three | is_two_pair | is_pair)

    digits = torch.zeros((n, 5), dtype=torch.long)
    category = torch.zeros((n,), dtype=torch.long)
    sorted_faces = torch.sort(ranks + 2, dim=1, descending=True).values

    category[is_straight_flush] = 8
    digits[is_straight_flush, 0] = straight_high[is_straight_flush]

    quad_rank = _topk_masked(rank_faces, quad_mask, k=1)[:, 0]
    quad_kicker = _topk_masked(rank_faces, single_mask, k=1)[:, 0]
    category[is_four] = 7
    digits[is_four, 0] = quad_rank[is_four]
    digits[is_four, 1] = quad_kicker[is_four]

    trip_rank = _topk_masked(rank_faces, trip_mask, k=1)[:, 0]
    top_pair = _topk_masked(rank_faces, pair_mask, k=2)
    category[is_full_house] = 6
    digits[is_full_house, 0] = trip_rank[is_full_house]
    digits[is_full_house, 1] = top_pair[is_full_house, 0]

    category[flush_only] = 5
    digits[flush_only] = sorted_faces[flush_only]

    category[straight_only] = 4
    digits[straight_only, 0] = straight_high[straight_only]

    kickers = _topk_masked(rank_faces, single_mask, k=3)
    category[is_three] = 3
    digits[is_three, 0] = trip_rank[is_three]
    digits[is_three, 1:3] = kickers[is_three, :2]

    category[is_two_pair] = 2
    digits[is_two_pair, 0:2] = top_pair[is_two_pair]
    digits[is_two_pair, 2] = kickers[is_two_pair, 0]

    category[is_pair] = 1
    digits[is_pair, 0] = top_pair[is_pair, 0]
    digits[is_pair, 1:4] = kickers[is_pair]

    category[is_high] = 0
    digits[is_high] = sorted_faces[is_high]

    base = 15
    weights = torch.tensor([base**4, base**3, base**2, base, 1], dtype=torch.long)
    score = category * (base**5) + (digits * weights).sum(dim=1)
    return score.to(torch.int32)


def _topk_masked(values: torch.Tensor, mask: torch.Tensor, *, k: int) -> torch.Tensor:
    masked = torch.where(mask, values, torch.zeros_like(values))
    return torch.topk(masked, k=k, dim=1).values


def _straight_high(rank_present: torch.Tensor) -> torch.Tensor:
    """Return straight high-card face value in [5..14], or 0 if not straight."""
    n = rank_present.shape[0]
    out = torch.zeros((n,), dtype=torch.long)

    for high in range(12, 3, -1):
        seq = rank_present[:, high - 4 : high + 1]
        hit = seq.all(dim=1) & (out == 0)
        out[hit] = high + 2

    wheel = (
        rank_present[:, 12]
        & rank_present[:, 0]
        & rank_present[:, 1]
        & rank_present[:, 2]
        & rank_present[:, 3]
    )
    out[wheel & (out == 0)] = 5
    return out
