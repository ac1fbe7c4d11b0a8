#모든 사운드 로딩과 재생을 전담할 AudioManager 클래스

import os

import numpy as np
import pygame

from core.logger import get_logger

logger = get_logger()

# 효과음 파일이 없을 때 대신 쓸 합성음 (Hz)
FALLBACK_TONES = {
    "PERFECT": 880,
    "HOLD": 660,
    "MISS": 220,
}


class AudioManager:
    def __init__(self, sound_dir="assets/sounds"):
        self.sound_dir = sound_dir
        self.sounds = {} # 효과음 캐시
        self.music_started = False
        # 믹서 초기화 (pygame.init()을 먼저 호출해야 함)
        try:
            pygame.mixer.pre_init(44100, -16, 2, 512) # 레이턴시 감소 설정
            pygame.mixer.init()
            logger.info("Audio Manager: Pygame Mixer 초기화 성공")
        except pygame.error as e:
            logger.warning(f"Pygame Mixer 초기화 실패. 사운드 없이 진행합니다. {e}")
            self.mixer_loaded = False
            return

        self.mixer_loaded = True

    def load_sounds(self, sound_map):
        """
        sound_map: {"판정이름": "파일이름.wav", ...}
        예: {"PERFECT": "hit_perfect.wav", "MISS": "miss.wav"}
        """
        if not self.mixer_loaded:
            return

        logger.info("Loading sounds...")
        for name, filename in sound_map.items():
            path = os.path.join(self.sound_dir, filename)
            if not os.path.exists(path):
                logger.warning(f"효과음 파일 없음: {path}")
                self._generate_tone(name)
                continue

            try:
                self.sounds[name] = pygame.mixer.Sound(path)
                logger.info(f"  {name} -> {filename}")
            except pygame.error as e:
                logger.warning(f"{name} 로드 실패: {e}")
                self._generate_tone(name)

    def _generate_tone(self, name, duration=0.08):
        """효과음 대신 짧은 사인파를 생성합니다."""
        frequency = FALLBACK_TONES.get(name)
        if frequency is None:
            return

        sample_rate, _, channels = pygame.mixer.get_init()
        t = np.arange(int(sample_rate * duration)) / sample_rate
        envelope = np.linspace(1.0, 0.0, t.size)
        wave = (np.sin(2 * np.pi * frequency * t) * envelope * 0.4 * 32767).astype(np.int16)
        buf = np.repeat(wave[:, None], channels, axis=1) if channels > 1 else wave
        try:
            self.sounds[name] = pygame.sndarray.make_sound(np.ascontiguousarray(buf))
        except (pygame.error, ValueError) as e:
            logger.warning(f"합성음 생성 실패: {name}, {e}")

    def play_sfx(self, name, loops=0):
        """효과음을 재생합니다."""
        if not self.mixer_loaded or name not in self.sounds:
            return

        # 기존 소리가 나고 있으면 중지하고 새로 재생 (타격감 향상)
        self.sounds[name].stop()
        self.sounds[name].play(loops=loops)

    def load_music(self, music_path):
        """배경 음악을 로드합니다."""
        if not self.mixer_loaded or not os.path.exists(music_path):
            logger.warning(f"음악 파일 없음: {music_path}")
            return False

        try:
            pygame.mixer.music.load(music_path)
            logger.info(f"Music loaded: {music_path}")
            return True
        except pygame.error as e:
            logger.warning(f"음악 로드 실패: {e}")
            return False

    def play_music(self):
        """배경 음악을 1회 재생합니다."""
        if not self.mixer_loaded:
            return
        pygame.mixer.music.play(0) # 0 = 1번만 재생
        self.music_started = True

    def stop_music(self):
        """배경 음악을 정지합니다."""
        self.music_started = False
        if not self.mixer_loaded:
            return
        pygame.mixer.music.stop()

    def is_music_finished(self):
        """재생을 시작한 음악이 끝났는지 확인합니다."""
        if not self.mixer_loaded or not self.music_started:
            return False
        return not pygame.mixer.music.get_busy()
