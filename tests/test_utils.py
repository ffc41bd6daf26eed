from __future__ import annotations

import unittest

from site_archiver.utils import safe_url_filename, sanitize_title


class SanitizeTitleTest(unittest.TestCase):
    def test_control_and_reserved_characters(self) -> None:
        self.assertEqual(sanitize_title("Report\u0000/2024"), "Report_2024")

    def test_each_reserved_character_becomes_underscore(self) -> None:
        self.assertEqual(sanitize_title('a/b\\c?d*e|f"g:h<i>j'), "a_b_c_d_e_f_g_h_i_j")

    def test_c1_controls_removed(self) -> None:
        self.assertEqual(sanitize_title("news\u0085\u009f"), "news")

    def test_empty_results_fall_back(self) -> None:
        for value in ("", "   ", "\u0001\u0002", " \t\n ", None):
            with self.subTest(value=value):
                self.assertEqual(sanitize_title(value), "untitled")

    def test_keeps_cjk_text(self) -> None:
        self.assertEqual(sanitize_title("  系所簡介  "), "系所簡介")


class SafeUrlFilenameTest(unittest.TestCase):
    def test_path_and_query(self) -> None:
        self.assertEqual(
            safe_url_filename("https://am.ndhu.edu.tw/p/16-1038-193282.php?Lang=zh-tw"),
            "_p_16-1038-193282.php_Lang=zh-tw",
        )

    def test_without_query(self) -> None:
        self.assertEqual(safe_url_filename("https://am.ndhu.edu.tw/about"), "_about")


if __name__ == "__main__":
    unittest.main()
