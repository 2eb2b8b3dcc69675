"""
測試粵拼 → IPA 轉換
"""

import pytest

from tojyutping.ipa import (
    CODA_TO_IPA,
    NUCLEUS_TO_IPA,
    ONSET_TO_IPA,
    RHYME_TO_IPA,
    TONE_TO_IPA,
    clear_cache,
    get_cache_stats,
    jyutping_to_ipa,
)


class TestJyutpingToIPA:
    """測試 jyutping_to_ipa"""

    def test_special_rhymes(self):
        assert jyutping_to_ipa("nei5") == ONSET_TO_IPA["n"] + RHYME_TO_IPA["ei"] + TONE_TO_IPA["5"]
        assert jyutping_to_ipa("hou2") == ONSET_TO_IPA["h"] + RHYME_TO_IPA["ou"] + TONE_TO_IPA["2"]
        assert jyutping_to_ipa("sik6") == ONSET_TO_IPA["s"] + RHYME_TO_IPA["ik"] + TONE_TO_IPA["6"]

    def test_nucleus_and_coda(self):
        assert jyutping_to_ipa("aa1") == "aː˥"
        assert jyutping_to_ipa("gwong2") == (
            ONSET_TO_IPA["gw"] + NUCLEUS_TO_IPA["o"] + CODA_TO_IPA["ng"] + TONE_TO_IPA["2"]
        )
        assert jyutping_to_ipa("jyu5") == ONSET_TO_IPA["j"] + NUCLEUS_TO_IPA["yu"] + TONE_TO_IPA["5"]

    @pytest.mark.parametrize("syllable, rhyme, tone", [("m4", "m", "4"), ("ng5", "ng", "5")])
    def test_syllabic_nasals(self, syllable, rhyme, tone):
        assert jyutping_to_ipa(syllable) == RHYME_TO_IPA[rhyme] + TONE_TO_IPA[tone]

    def test_multiple_syllables(self):
        assert jyutping_to_ipa("nei5 hou2") == jyutping_to_ipa("nei5") + "." + jyutping_to_ipa("hou2")

    def test_case_insensitive(self):
        assert jyutping_to_ipa("NEI5") == jyutping_to_ipa("nei5")

    def test_unparsable(self):
        assert jyutping_to_ipa("xyz") == ""
        assert jyutping_to_ipa("") == ""

    def test_cache_stats(self):
        clear_cache()
        jyutping_to_ipa("hou2")
        jyutping_to_ipa("hou2")
        stats = get_cache_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["currsize"] == 1
