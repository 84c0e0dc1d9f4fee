import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

'''
Banded LCS and pairwise shortest common supersequence.

The sequences handled here are assumed to be copies of one original sequence that lost a
bounded number of characters to deletions. Their alignments therefore stay close to the
main diagonal, and the LCS table is only filled inside a diagonal band of half-width
2 * threshold + 2. Cells outside the band keep their zero default; in-band cells on the
band edge read them as they are. The result is exact as long as the optimal alignment path
never leaves the band, which holds for genuinely close inputs but is not guaranteed for
adversarial ones.
'''

BAND_MARGIN = 2


def band_width(threshold: int) -> int:
    return 2 * threshold + BAND_MARGIN


def is_subsequence(subseq: str, seq: str) -> bool:
    '''Return True if subseq can be obtained from seq by deleting characters.'''
    it = iter(seq)
    return all(ch in it for ch in subseq)


def is_supersequence_of_all(scs: str, sequences: List[str]) -> bool:
    return all(is_subsequence(seq, scs) for seq in sequences)


@dataclass
class BandedLCS:
    sequence1: str
    sequence2: str
    threshold: int
    matrix: np.ndarray = field(init=False, repr=False)
    length: int = 0

    def __post_init__(self):
        self.matrix = np.zeros((len(self.sequence1) + 1, len(self.sequence2) + 1), dtype=np.int64)

    def band(self, i: int) -> range:
        '''Columns of row i that lie inside the band.'''
        width = band_width(self.threshold)
        return range(max(1, i - width), min(len(self.sequence2), i + width) + 1)

    def fill(self) -> int:
        dp = self.matrix
        s1, s2 = self.sequence1, self.sequence2
        for i in range(1, len(s1) + 1):
            for j in self.band(i):
                if s1[i - 1] == s2[j - 1]:
                    dp[i, j] = dp[i - 1, j - 1] + 1
                else:
                    dp[i, j] = max(dp[i - 1, j], dp[i, j - 1])
        self.length = int(dp[len(s1), len(s2)])
        return self.length

    def backtrack(self) -> str:
        # Ties between the upper and left neighbour move along sequence2.
        dp = self.matrix
        s1, s2 = self.sequence1, self.sequence2
        i, j = len(s1), len(s2)
        lcs = []
        while i > 0 and j > 0:
            if s1[i - 1] == s2[j - 1]:
                lcs.append(s1[i - 1])
                i -= 1
                j -= 1
            elif dp[i - 1, j] > dp[i, j - 1]:
                i -= 1
            else:
                j -= 1
        lcs.reverse()
        return ''.join(lcs)


def find_lcs(s1: str, s2: str, threshold: int) -> BandedLCS:
    '''Fill the banded LCS table of s1 and s2 and return the engine holding it.'''
    engine = BandedLCS(s1, s2, threshold)
    engine.fill()
    return engine


def backtrack_lcs(engine: BandedLCS) -> str:
    return engine.backtrack()


def build_scs(s1: str, s2: str, lcs: str) -> str:
    '''
    Interleave s1 and s2 around their common subsequence lcs.

    Characters of either string that precede the next LCS character are copied first
    (those of s1, then those of s2), then the shared character is emitted once.
    Whatever is left of s1 and then of s2 is appended at the end.
    '''
    i = j = p = 0
    scs = []
    while i < len(s1) and j < len(s2) and p < len(lcs):
        while i < len(s1) and s1[i] != lcs[p]:
            scs.append(s1[i])
            i += 1
        while j < len(s2) and s2[j] != lcs[p]:
            scs.append(s2[j])
            j += 1
        scs.append(lcs[p])
        i += 1
        j += 1
        p += 1
    scs.append(s1[i:])
    scs.append(s2[j:])
    return ''.join(scs)


def merge_two_strings(s1: str, s2: str, threshold: int) -> str:
    engine = find_lcs(s1, s2, threshold)
    lcs = backtrack_lcs(engine)
    logging.debug(f'Merged lengths {len(s1)} and {len(s2)} with LCS length {len(lcs)}')
    return build_scs(s1, s2, lcs)


def merge_all_sequences(sequences: List[str], threshold: int) -> str:
    '''Fold merge_two_strings over sequences from left to right.'''
    if not sequences:
        return ''
    result = sequences[0]
    for sequence in sequences[1:]:
        result = merge_two_strings(result, sequence, threshold)
    return result
