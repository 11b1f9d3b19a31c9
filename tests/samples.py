"""Pasted stats blocks shared by the parser, analysis and API tests."""

PPG_BLOCK = """PPG  1.85  1.10
PPG L8  2.10  0.90
Opp PPG L8  1.40  1.60
PPG Bias  0.55  -0.50"""

INDEX_BLOCK = """Offence  11.5  14.2
Defence  12.0  15.5
H v A  -0.32
Goal Edge  1.8"""

VENUE_BLOCK = """PPG  2.10  0.80
First to score (%)  65%  40%
First to concede (%)  30%  60%
Games with a FHG (%)  70  65
Games with a SHG (%)  80  75
Clean sheets (%)  45  20
Scoring Rate  85  30
Conceding Rate  35  70"""

HOME_FIVE_MIN = """1-5  1-0  1-0  0-0
46-50  2-1  1-1  1-0
76-80  3-2  1-0  2-2
81-85  2-1  1-1  1-0
86-90  4-1  1-0  3-1"""

AWAY_FIVE_MIN = """76-80  2-2  0-1  2-1
81-85  1-3  0-1  1-2
86-90  0-2  0-1  0-1"""

HALF_SCORED = """H@H:
1ST HALF OVERS  0.5+ 75%  1.5+ 25%
2ND HALF OVERS  0.5+ 88%  1.5+ 38%
GOALS BY HALF  1st 35%  2nd 65%
A@A:
1ST HALF OVERS  0.5+ 50%  1.5+ 10%
2ND HALF OVERS  0.5+ 60%  1.5+ 20%
GOALS BY HALF  1st 45%  2nd 55%"""

HALF_CONCEDED = """H@H:
1ST HALF OVERS  0.5+ 30%  1.5+ 5%
2ND HALF OVERS  0.5+ 40%  1.5+ 10%
GOALS BY HALF  1st 50%  2nd 50%
A@A:
1ST HALF OVERS  0.5+ 55%  1.5+ 15%
2ND HALF OVERS  0.5+ 70%  1.5+ 30%
GOALS BY HALF  1st 30%  2nd 70%"""

LEAGUE_TABLE = """Pos Team GP W D L GF GA GD Pts
1. Arsenal  20  14  4  2  41  15  26  46
2. Chelsea  20  12  5  3  38  20  18  41
3. Luton Town  20  3  4  13  20  40  -20  13"""

HOME_RESULTS = """Last results
12/10/2024  Arsenal v Spurs  1-1 (1-0)
05/10/2024  Arsenal v Wolves  2-1 (0-1)
28/09/2024  Arsenal v Everton  3-0 (1-0)
21/09/2024  Leeds v Arsenal  0-2 (0-1)"""

AWAY_RESULTS = """13/10/2024  Spurs v Chelsea  1-2 (1-0)
06/10/2024  Wolves v Chelsea  0-0
29/09/2024  Everton v Chelsea  2-0 (1-0)"""
